import logging
import time
from typing import List, NamedTuple, Optional, Tuple

import imageio.v2 as imageio  # v2 API is more stable
import numpy as np
import pygame

import config
from logging_config import setup_logging
from rings import Point, RingSet

logger = logging.getLogger("ringlife.draw")


class DrawCommand(NamedTuple):
    center: Tuple[float, float]
    radius: float
    color: Tuple[int, int, int]
    width: int


class PresentationAdapter:
    """
    Turns pointer presses into spawns and rings into circle outlines.

    Only the last seen button state lives here, so one held press spawns
    exactly one ring however many ticks it spans.
    """

    def __init__(self, ring_set: RingSet, background=None):
        self.ring_set = ring_set
        self.background = pygame.Color(background or config.BACKGROUND_COLOR)
        self.button_down = False

    def handle_pointer(self, pressed: bool, position) -> Optional[int]:
        if pressed == self.button_down:
            return None
        self.button_down = pressed
        if not pressed:
            return None
        x, y = position
        return self.ring_set.spawn(Point(float(x), float(y)))

    def draw_commands(self) -> List[DrawCommand]:
        return [
            DrawCommand(
                center=(ring.origin.x, ring.origin.y),
                radius=max(ring.radius, 0.0),
                color=ring.color,
                width=int(round(ring.weight)),
            )
            for ring in self.ring_set.snapshot()
        ]

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(self.background)
        for command in self.draw_commands():
            # pygame skips circles with radius < 1
            pygame.draw.circle(
                surface, command.color, command.center, command.radius, command.width
            )


def main():
    setup_logging(config.LOG_LEVEL, config.LOG_FILE, config.LOG_INTERSECTIONS)

    pygame.init()
    screen = pygame.display.set_mode(config.screen_size())
    pygame.display.set_caption("Rings")
    clock = pygame.time.Clock()

    if config.RECORD:
        frames = []

    ring_set = RingSet(rng=np.random.default_rng(config.SEED))
    adapter = PresentationAdapter(ring_set)

    running = True
    count = 0
    time_step = 0.0

    while running:
        count += 1

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                adapter.handle_pointer(True, event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                adapter.handle_pointer(False, event.pos)

        start_time = time.time()
        ring_set.step()
        time_step += time.time() - start_time

        adapter.render(screen)
        pygame.display.flip()

        if config.RECORD:
            frame_data = pygame.surfarray.array3d(screen)
            frame_data = np.transpose(frame_data, (1, 0, 2))
            frames.append(frame_data)

        clock.tick(config.FPS)

        if config.FRAME_LIMIT and count >= config.FRAME_LIMIT:
            break

    if config.RECORD:
        imageio.mimsave(config.OUTPUT_FILE, frames, fps=config.FPS)
        logger.info("Wrote %d frames to %s", len(frames), config.OUTPUT_FILE)

    pygame.quit()
    logger.info("%d rings after %d frames", len(ring_set), count)
    logger.info("Time taken for steps: %s seconds", time_step)


if __name__ == "__main__":
    main()
