from c8emu.common.hwconf import STACK_DEPTH
from c8emu.common.errors import StackError


class CallStack:
    ''' Return addresses saved by CALL '''
    frames: list[int]

    def __init__(self, depth: int = STACK_DEPTH):
        self.depth = depth
        self.frames = []

    def __len__(self) -> int:
        return len(self.frames)

    def push(self, addr: int):
        if len(self.frames) >= self.depth:
            raise StackError(f'Call stack overflow at 0x{addr:03X}')

        self.frames.append(addr)

    def pop(self) -> int:
        if not self.frames:
            raise StackError('Return with empty call stack')

        return self.frames.pop()
