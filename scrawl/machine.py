"""
The execution context: an operand stack, the user's dictionary, and a drawing cursor.
One machine per run. Nothing here survives from one program to the next.

Also the run-time failures. Any of them aborts the whole run; nobody catches them midway.
"""
import math
from typing import Mapping, Optional

from . import syntax
from .resolution import resolve
from .surface import Surface

TURN = 2 * math.pi

class ScrawlError(Exception):
	""" Something a running program did that cannot be carried on from. """
	trail: tuple[syntax.Value, ...] = ()

	def __init__(self, message:str, culprit:Optional[syntax.Value]=None):
		super().__init__(message)
		self.message = message
		self.culprit = culprit

class StackUnderflow(ScrawlError): pass
class TypeMismatch(ScrawlError): pass
class InvalidOperand(ScrawlError): pass
class IndexOutOfRange(ScrawlError): pass
class TooDeep(ScrawlError): pass

def wrap_heading(heading:float) -> float:
	""" Keep the heading within one turn, keeping the sign the way fmod does. """
	if not math.isfinite(heading): return math.nan
	return math.fmod(heading, TURN)

class Cursor:
	def __init__(self, x:float, y:float):
		self.x, self.y = x, y
		self.heading = 0.0
		self.down = False

	def position(self) -> tuple[float, float]:
		return self.x, self.y

	def step(self, distance:float):
		if math.isfinite(self.heading):
			self.x += math.cos(self.heading) * distance
			self.y += math.sin(self.heading) * distance
		else:
			self.x = self.y = math.nan

	def __repr__(self):
		return "<Cursor %r,%r heading %r %s>" % (self.x, self.y, self.heading, "down" if self.down else "up")

class Machine:
	def __init__(self, surface:Surface, width:float, height:float, builtins:Mapping[str, syntax.Operator]):
		self.stack: list[syntax.Value] = []
		self.dict: dict[str, syntax.Value] = {}
		self.cursor = Cursor(width / 2, height / 2)
		self.surface = surface
		self.builtins = builtins
		self.trail: list[syntax.Value] = []
		self.tracer = None

	def resolve(self, value:syntax.Value) -> syntax.Value:
		return resolve(value, self.builtins, self.dict)

	def push(self, value:syntax.Value):
		assert isinstance(value, syntax.Value), value
		self.stack.append(value)

	def pop_raw(self) -> syntax.Value:
		if not self.stack: raise StackUnderflow("Stack underflow")
		return self.stack.pop()

	def pop(self) -> syntax.Value:
		return self.resolve(self.pop_raw())

	def peek(self) -> syntax.Value:
		if not self.stack: raise StackUnderflow("Stack underflow")
		return self.stack[-1]

	def pop_number(self) -> float:
		head = self.pop()
		if isinstance(head, syntax.Constant): return head.numeric()
		return math.nan

	def pop_block(self, role:str) -> syntax.Block:
		head = self.pop()
		if not isinstance(head, syntax.Block):
			raise TypeMismatch("Expected a block for %s, but got %s" % (role, head), head)
		return head

	def draw_to(self, x:float, y:float):
		""" Called after the cursor moves from (x,y); leaves a mark only if the pen is down. """
		if not self.cursor.down: return
		surface = self.surface
		surface.begin_path()
		surface.move_to(x, y)
		surface.line_to(self.cursor.x, self.cursor.y)
		surface.stroke()

	def mark_cursor(self):
		surface, cursor = self.surface, self.cursor
		surface.begin_path()
		surface.arc(cursor.x, cursor.y, 3, 0, TURN)
		surface.fill()
