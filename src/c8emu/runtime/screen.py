'''
pygame window for the CHIP-8 display and keypad.

The window loop runs in a background thread so the CPU keeps the
caller's thread. Hex keypad layout is mapped onto the left of a QWERTY
keyboard:

    1 2 3 C        1 2 3 4
    4 5 6 D   ->   Q W E R
    7 8 9 E        A S D F
    A 0 B F        Z X C V

Escape or closing the window stops the surface.
'''

import logging as lg
import threading as th

from c8emu.common.hwconf import SCREEN_WIDTH, SCREEN_HEIGHT
from c8emu.runtime.surface import Surface


KEYMAP = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
    'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
}

PIXEL_ON = (255, 255, 255)
PIXEL_OFF = (0, 0, 0)


class PygameSurface(Surface):
    def __init__(self, scale: int = 10, fps: int = 60, title: str = 'CHIP-8 - ESC to exit'):
        super().__init__(SCREEN_WIDTH, SCREEN_HEIGHT)
        self.scale = scale
        self.fps = fps
        self.title = title
        self._thread: th.Thread | None = None
        self._stop_event = th.Event()
        self._started = th.Event()

    def start(self):
        ''' Open the window; returns once it is up (or failed to come up) '''
        if self._thread is not None:
            return

        self._thread = th.Thread(target=self._run, daemon=True, name='c8emu-screen')
        self._thread.start()
        self._started.wait(timeout=5.0)

    def stop(self):
        self._stop_event.set()
        self.signal_input()

        if self._thread is not None:
            self._thread.join(timeout=3.0)
            self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def on_key(self, name: str, down: bool):
        code = KEYMAP.get(name)

        if code is None:
            return

        if down:
            self.press(code)
        else:
            self.release(code)

    def _render(self, pygame, screen, frame: bytes):
        screen.fill(PIXEL_OFF)

        for inx, lit in enumerate(frame):
            if not lit:
                continue

            y, x = divmod(inx, self.width)
            rect = (x * self.scale, y * self.scale, self.scale, self.scale)
            pygame.draw.rect(screen, PIXEL_ON, rect)

    def _run(self):
        pygame = None

        try:
            import pygame

            pygame.init()
            pygame.display.set_caption(self.title)
            screen = pygame.display.set_mode((self.width * self.scale, self.height * self.scale))
            clock = pygame.time.Clock()
            frame = bytes(self.width * self.height)

            lg.debug('Screen started')
            self._started.set()

            while not self._stop_event.is_set():
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._stop_event.set()
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_ESCAPE:
                            self._stop_event.set()
                        else:
                            self.on_key(pygame.key.name(event.key), True)
                    elif event.type == pygame.KEYUP:
                        self.on_key(pygame.key.name(event.key), False)

                latest = self.take_frame()

                if latest is not None:
                    frame = latest

                self._render(pygame, screen, frame)
                pygame.display.flip()
                clock.tick(self.fps)

        finally:
            self._stop_event.set()
            self._started.set()
            self.signal_input()

            if pygame is not None:
                pygame.quit()

            lg.debug('Screen stopped')
