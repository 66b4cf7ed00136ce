import logging as lg
import threading as th

from c8emu.common.hwconf import GP_REGS, FLAG_REG, ROM_BASE, TIMER_PERIOD


class CountdownTimer(th.Thread):
    ''' 8-bit counter decremented once per period while nonzero '''
    value: int

    def __init__(self, name: str, period: float = TIMER_PERIOD):
        super().__init__(name=name, daemon=True)
        self.period = period
        self.value = 0
        self.lock = th.Lock()
        self.stop_event = th.Event()

    def get(self) -> int:
        with self.lock:
            return self.value

    def set(self, value: int):
        with self.lock:
            self.value = value & 0xFF

    def tick(self):
        with self.lock:
            if self.value != 0:
                self.value -= 1

    def stop(self):
        self.stop_event.set()

    def run(self):
        lg.debug(f'Timer {self.name} started')

        while not self.stop_event.wait(self.period):
            self.tick()

        lg.debug(f'Timer {self.name} stopped')


class Registers:
    pc: int        # Program counter
    sp: int        # Stack pointer
    i: int         # Index register
    v: list[int]   # General purpose V0..VF

    def __init__(self, start_timers: bool = True):
        self.pc = ROM_BASE
        self.sp = 0
        self.i = 0
        self.v = [0] * GP_REGS

        self.dt = CountdownTimer('delay')
        self.st = CountdownTimer('sound')

        if start_timers:
            self.start()

    def start(self):
        self.dt.start()
        self.st.start()

    def stop(self):
        for timer in (self.dt, self.st):
            timer.stop()

            if timer.is_alive():
                timer.join()

    # - General purpose - #

    def get(self, reg: int) -> int:
        return self.v[reg]

    def set(self, reg: int, value: int):
        self.v[reg] = value & 0xFF

    def set_flag(self, flag: bool | int):
        self.v[FLAG_REG] = int(bool(flag))

    # - Index - #

    def get_i(self) -> int:
        return self.i

    def set_i(self, value: int):
        self.i = value & 0xFFFF

    # - Timers - #

    def get_dt(self) -> int:
        return self.dt.get()

    def set_dt(self, value: int):
        self.dt.set(value)

    def get_st(self) -> int:
        return self.st.get()

    def set_st(self, value: int):
        self.st.set(value)

    def debug_dump(self):
        state = [f'{k}:{v:X}' for k, v in {
            'PC': self.pc,
            'SP': self.sp,
            'I': self.i,
            'DT': self.get_dt(),
            'ST': self.get_st()
        }.items()]

        state.extend([f'V{n:X}:{self.v[n]:02X}' for n in range(GP_REGS)])

        lg.debug(' '.join(state))
