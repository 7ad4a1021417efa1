"""
The three kinds of value that flow through the machine.
The tokenizer makes constants and blocks; operators come only from the primitive table.
Nothing here knows how to resolve or evaluate; that is the business of later modules.
"""
import math
import re
from typing import Callable, Iterable, Optional

_LEADING_NUMBER = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

def parse_number(text:str) -> float:
	"""
	Read the longest leading decimal literal of the text, ignoring any trailing junk.
	No literal at all is not-a-number, not an error.
	"""
	match = _LEADING_NUMBER.match(text)
	if match is None: return math.nan
	return float(match.group())

def number_text(number:float) -> str:
	""" Canonical spelling for a computed number, so 3.0 reads back as "3". """
	if math.isnan(number): return "NaN"
	if math.isinf(number): return "Infinity" if number > 0 else "-Infinity"
	if number == int(number) and abs(number) < 1e21: return str(int(number))
	return repr(number)

class Value:
	""" Root of the closed family: Constant, Block, Operator. """
	spot: int = 0  # zero-spot means computed at run-time rather than read from source.

	def left(self) -> int: return self.spot
	def right(self) -> int: return self.spot
	def span(self) -> tuple[int, int]: return self.left(), self.right()
	def is_located(self) -> bool: return self.spot > 0

class Constant(Value):
	""" A literal. Numeric operators read the text as a number on demand. """
	def __init__(self, text:str, spot:int=0, number:Optional[float]=None):
		assert isinstance(text, str), type(text)
		self.text, self.spot, self._number = text, spot, number

	@staticmethod
	def of_number(number:float) -> "Constant":
		return Constant(number_text(number), number=number)

	def numeric(self) -> float:
		if self._number is None: return parse_number(self.text)
		return self._number

	def is_truthy(self) -> bool:
		return self.text != "" and self.numeric() != 0

	def __eq__(self, other):
		return isinstance(other, Constant) and self.text == other.text
	def __hash__(self): return hash(self.text)
	def __repr__(self): return "<Constant %r>" % self.text
	def __str__(self): return self.text

class Block(Value):
	""" An immutable sequence of values, made by bracket grouping or by operators. """
	def __init__(self, items:Iterable[Value], spot:int=0, end:int=0):
		self.items = tuple(items)
		self.spot, self._end = spot, end or spot

	def right(self): return self._end

	def __len__(self): return len(self.items)
	def __iter__(self): return iter(self.items)
	def __getitem__(self, index): return self.items[index]

	def __add__(self, other:"Block") -> "Block":
		return Block(self.items + other.items)
	def append(self, item:Value) -> "Block":
		return Block(self.items + (item,))
	def prepend(self, item:Value) -> "Block":
		return Block((item,) + self.items)

	def __eq__(self, other):
		return isinstance(other, Block) and self.items == other.items
	def __hash__(self): return hash(self.items)
	def __repr__(self): return "<Block %s>" % self
	def __str__(self): return " ".join(["[", *map(str, self.items), "]"])

class Operator(Value):
	""" A primitive. The procedure receives the machine and does whatever it does. """
	def __init__(self, name:str, desc:str, fn:Callable):
		self.name, self.desc, self.fn = name, desc, fn
	def __repr__(self): return "<Operator %s>" % self.name
	def __str__(self): return self.name
