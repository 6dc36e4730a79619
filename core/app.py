"""
core/app.py — Pygame shell for the developer dashboard

Owns the window, the frame clock and a single dashboard scene.  The
scene decides when an in-game day passes; the shell only pumps events
and redraws.

    app = App(title="City Economy", width=960, height=640)
    app.run(DashboardScene(sim))
"""

from __future__ import annotations
import pygame


class App:
    def __init__(self, title: str = "City Economy", width: int = 960, height: int = 640):
        pygame.init()
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 30
        self.dt = 0.0

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18)

    # -- Main loop --

    def run(self, scene):
        """Drive *scene* (anything with handle_event / update / draw) until quit."""
        while self.running:
            self.dt = self.clock.tick(self.fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    self.running = False
                else:
                    scene.handle_event(event, self)

            scene.update(self.dt, self)
            self.screen.fill((18, 22, 28))
            scene.draw(self.screen, self)
            pygame.display.flip()

        pygame.quit()

    # -- Convenience --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(230, 230, 230), font=None) -> pygame.Rect:
        """Quick text draw. Returns the rect for layout chaining."""
        f = font or self.font
        img = f.render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_bar(self, surface: pygame.Surface, x: int, y: int, w: int, h: int,
                 fraction: float, color=(80, 200, 120), bg=(50, 50, 60)) -> None:
        """Horizontal progress bar filled to *fraction* (0..1)."""
        fraction = max(0.0, min(1.0, fraction))
        pygame.draw.rect(surface, bg, (x, y, w, h))
        pygame.draw.rect(surface, color, (x, y, int(w * fraction), h))
