"""
The drawing capability the machine is given at birth.

This is the canonical imperative-canvas vocabulary: a path is begun,
moved and lined along, then stroked or filled. Adapters live in the adapters package.
"""
import abc
import math

class Surface(abc.ABC):
	@abc.abstractmethod
	def begin_path(self): pass

	@abc.abstractmethod
	def move_to(self, x:float, y:float): pass

	@abc.abstractmethod
	def line_to(self, x:float, y:float): pass

	@abc.abstractmethod
	def stroke(self): pass

	@abc.abstractmethod
	def arc(self, x:float, y:float, radius:float, start:float, end:float): pass

	@abc.abstractmethod
	def fill(self): pass

	@abc.abstractmethod
	def clear_rect(self, x:float, y:float, width:float, height:float): pass

	def finish(self):
		""" The run is over. Screens may linger until the viewer is done looking. """
		pass

class PathSurface(Surface, abc.ABC):
	"""
	Most real targets draw whole shapes, not path fragments.
	This collects the fragments and hands over finished shapes.
	"""
	def __init__(self):
		self._points = []
		self._arcs = []

	def begin_path(self):
		self._points = []
		self._arcs = []

	def move_to(self, x, y):
		self._points.append([(x, y)])

	def line_to(self, x, y):
		if not self._points: self._points.append([(x, y)])
		else: self._points[-1].append((x, y))

	def arc(self, x, y, radius, start, end):
		self._arcs.append((x, y, radius, start, end))

	def stroke(self):
		for run in self._points:
			if len(run) > 1 and _finite(run): self.draw_polyline(run)

	def fill(self):
		for arc in self._arcs:
			if _finite([arc[:2]]): self.draw_disc(*arc)

	@abc.abstractmethod
	def draw_polyline(self, points:list[tuple[float, float]]): pass

	@abc.abstractmethod
	def draw_disc(self, x:float, y:float, radius:float, start:float, end:float): pass

def _finite(points) -> bool:
	""" Screens cannot plot not-a-number, so such shapes are left off. """
	return all(math.isfinite(c) for xy in points for c in xy)
