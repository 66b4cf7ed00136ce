''' Display/input collaborator of the CPU '''

import logging as lg
import threading as th

from c8emu.common.hwconf import SCREEN_WIDTH, SCREEN_HEIGHT, KEY_COUNT


class Surface:
    '''
    Monochrome pixel buffer plus keypad state.

    Frames are handed to the consumer through a single pending slot:
    publishing replaces any frame the consumer has not taken yet, so the
    CPU never blocks on a slow display. Key presses and shutdown both set
    `input_event`, which the CPU waits on during LD Vx, K.

    Subclasses decide whether the surface is running.
    '''
    width: int
    height: int
    pixels: bytearray
    keys: list[int]

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height)
        self.frame_lock = th.Lock()
        self.pending: bytes | None = None
        self.keys = []
        self.last_press: int | None = None
        self.keys_lock = th.Lock()
        self.input_event = th.Event()

    # - Frame - #

    def index(self, x: int, y: int) -> int:
        return (y % self.height) * self.width + (x % self.width)

    def pixel(self, x: int, y: int) -> bool:
        return self.pixels[self.index(x, y)] != 0

    def clear_frame(self):
        self.pixels[:] = bytes(len(self.pixels))

    def draw(self, x: int, y: int, sprite: bytes) -> bool:
        collision = False

        for row, bits in enumerate(sprite):
            for col in range(8):
                if bits & (0x80 >> col) == 0:
                    continue

                inx = self.index(x + col, y + row)

                if self.pixels[inx]:
                    collision = True
                    self.pixels[inx] = 0
                else:
                    self.pixels[inx] = 1

        return collision

    def publish_frame(self):
        with self.frame_lock:
            self.pending = bytes(self.pixels)

    def take_frame(self) -> bytes | None:
        with self.frame_lock:
            frame, self.pending = self.pending, None

        return frame

    # - Keypad - #

    def press(self, code: int):
        if not 0 <= code < KEY_COUNT:
            raise ValueError(f'Invalid key code {code}')

        with self.keys_lock:
            if code not in self.keys:
                self.keys.append(code)

            self.last_press = code

        self.signal_input()

    def release(self, code: int):
        with self.keys_lock:
            if code in self.keys:
                self.keys.remove(code)

    def key_down(self, code: int) -> bool:
        with self.keys_lock:
            return code in self.keys

    def poll_pressed_key(self) -> int | None:
        ''' Latest unconsumed press, else any held key '''
        with self.keys_lock:
            if self.last_press is not None:
                key, self.last_press = self.last_press, None
                return key

            return self.keys[0] if self.keys else None

    def clear_press(self):
        with self.keys_lock:
            self.last_press = None

    def signal_input(self):
        self.input_event.set()

    def wait_input(self, timeout: float | None = None) -> bool:
        fired = self.input_event.wait(timeout)
        self.input_event.clear()
        return fired

    # - Lifetime - #

    def is_running(self) -> bool:
        raise NotImplementedError()


class HeadlessSurface(Surface):
    ''' Surface with no window; keys and shutdown are driven by the caller '''

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        super().__init__(width, height)
        self.running = th.Event()
        self.running.set()

    def is_running(self) -> bool:
        return self.running.is_set()

    def close(self):
        lg.debug('Headless surface closed')
        self.running.clear()
        self.signal_input()

    def render_text(self, frame: bytes | None = None) -> str:
        if frame is None:
            frame = bytes(self.pixels)

        rows = [
            ''.join('#' if frame[y * self.width + x] else '.' for x in range(self.width))
            for y in range(self.height)
        ]

        return '\n'.join(rows)
