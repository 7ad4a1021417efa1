"""
Native driver to draw via PyGame.

The display and event loop are constrained to a single thread, and so is the interpreter,
so the whole run happens first and the event loop only keeps the picture up until you quit.
"""
import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import pygame
from pygame import draw

from ..surface import PathSurface

INK = (0, 0, 0)
PAPER = (255, 255, 255)

class PygameSurface(PathSurface):
	def __init__(self, width:int, height:int, fps=30):
		super().__init__()
		pygame.init()
		pygame.display.set_caption("Scrawl")
		self._display = pygame.display.set_mode((width, height))
		self._display.fill(PAPER)
		self._fps = fps

	def draw_polyline(self, points):
		draw.lines(self._display, INK, False, points)

	def draw_disc(self, x, y, radius, start, end):
		draw.circle(self._display, INK, (x, y), radius)

	def clear_rect(self, x, y, width, height):
		self._display.fill(PAPER, pygame.Rect(x, y, width, height))

	def finish(self):
		pygame.display.flip()
		clock = pygame.time.Clock()
		while True:
			for event in pygame.event.get():
				if event.type in (pygame.QUIT, pygame.KEYDOWN, pygame.MOUSEBUTTONUP):
					pygame.quit()
					return
			clock.tick(self._fps)
