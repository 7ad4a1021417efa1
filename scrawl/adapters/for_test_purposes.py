"""
Surfaces that draw nothing, as scaffolding for tests and for headless runs.
"""
from ..surface import Surface

class RecordingSurface(Surface):
	""" Remembers every call, in order, as (method-name, args). """
	def __init__(self):
		self.calls = []

	def names(self):
		return [name for name, _ in self.calls]

	def begin_path(self): self.calls.append(("begin_path", ()))
	def move_to(self, x, y): self.calls.append(("move_to", (x, y)))
	def line_to(self, x, y): self.calls.append(("line_to", (x, y)))
	def stroke(self): self.calls.append(("stroke", ()))
	def arc(self, x, y, radius, start, end): self.calls.append(("arc", (x, y, radius, start, end)))
	def fill(self): self.calls.append(("fill", ()))
	def clear_rect(self, x, y, width, height): self.calls.append(("clear_rect", (x, y, width, height)))
	def finish(self): self.calls.append(("finish", ()))

class NullSurface(Surface):
	def begin_path(self): pass
	def move_to(self, x, y): pass
	def line_to(self, x, y): pass
	def stroke(self): pass
	def arc(self, x, y, radius, start, end): pass
	def fill(self): pass
	def clear_rect(self, x, y, width, height): pass
