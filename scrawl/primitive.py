"""
Build the primitive operator table.

Every operator takes the machine and nothing else. Where an operator takes two operands,
the top of the stack is the second one: "5 3 -" is two.
The table is frozen once this module has loaded, and every machine shares it.
"""
import itertools
import math
import operator
from types import MappingProxyType

from . import syntax
from .evaluator import invoke
from .machine import Machine, TypeMismatch, InvalidOperand, IndexOutOfRange, TURN, wrap_heading

_table = {}

def _builtin(name:str, desc:str):
	def register(fn):
		assert name not in _table, name
		_table[name] = syntax.Operator(name, desc, fn)
		return fn
	return register

def catalog() -> list[str]:
	return ["%s = %s" % (name, BUILTINS[name].desc) for name in sorted(BUILTINS)]

###############################################################################
# Arithmetic

def _arithmetic(name, desc, fn):
	def arithmetic(machine:Machine):
		b = machine.pop_number()
		a = machine.pop_number()
		machine.push(syntax.Constant.of_number(fn(a, b)))
	_builtin(name, desc)(arithmetic)

_arithmetic("*", "mul <x>, <y>", operator.mul)
_arithmetic("-", "subtract <x>, <y>", operator.sub)

@_builtin("+", "sum <x>, <y>; also joins blocks")
def _sum(machine:Machine):
	b = machine.pop()
	a = machine.pop()
	try: fn = SUM[type(a), type(b)]
	except KeyError: raise TypeMismatch("Cannot add %s and %s" % (a, b), b)
	machine.push(fn(a, b))

SUM = {
	(syntax.Constant, syntax.Constant): lambda a, b: syntax.Constant.of_number(a.numeric() + b.numeric()),
	(syntax.Block, syntax.Constant): syntax.Block.append,
	(syntax.Constant, syntax.Block): lambda a, b: b.prepend(a),
	(syntax.Block, syntax.Block): syntax.Block.__add__,
}

###############################################################################
# The cursor

@_builtin("a", "angle <x>")
def _angle(machine:Machine):
	machine.cursor.heading = machine.pop_number()

@_builtin("f", "forward <x>")
def _forward(machine:Machine):
	_travel(machine, machine.pop_number())

@_builtin("b", "back <x>")
def _back(machine:Machine):
	_travel(machine, -machine.pop_number())

def _travel(machine:Machine, distance:float):
	x, y = machine.cursor.position()
	machine.cursor.step(distance)
	machine.draw_to(x, y)

@_builtin("d", "pen down")
def _pen_down(machine:Machine):
	machine.cursor.down = True

@_builtin("u", "pen up")
def _pen_up(machine:Machine):
	machine.cursor.down = False

@_builtin("r", "rotate cw, <x>")
def _rotate_cw(machine:Machine):
	_turn(machine, machine.pop_number())

@_builtin("l", "rotate ccw, <x>")
def _rotate_ccw(machine:Machine):
	_turn(machine, -machine.pop_number())

def _turn(machine:Machine, degrees:float):
	cursor = machine.cursor
	cursor.heading = wrap_heading(cursor.heading + TURN * degrees / 360)

###############################################################################
# Blocks and control

@_builtin("c", "do-n <n>, <f>")
def _do_n(machine:Machine):
	block = machine.pop()
	count = machine.pop_number()
	if math.isnan(count) or count <= 0: return
	times = itertools.repeat(None) if math.isinf(count) else range(int(count))
	for _ in times:
		invoke(block, machine)

@_builtin("e", "each <xs>, <f>")
def _each(machine:Machine):
	block = machine.pop()
	items = machine.pop_block("each")
	for item in items:
		machine.push(item)
		invoke(block, machine)

@_builtin("z", "zip <xs>, <ys>")
def _zip(machine:Machine):
	ys = machine.pop_block("zip")
	xs = machine.pop_block("zip")
	machine.push(syntax.Block(syntax.Block(pair) for pair in zip(xs, ys)))

@_builtin("x", "expand <xs>")
def _expand(machine:Machine):
	for item in machine.pop_block("expand"):
		machine.push(item)

@_builtin(".", "duplicate <x>")
def _duplicate(machine:Machine):
	machine.push(machine.peek())

@_builtin("!", "eval <f>")
def _apply(machine:Machine):
	invoke(machine.pop(), machine)

@_builtin("i", "index <xs>, <i>")
def _index(machine:Machine):
	i = machine.pop_number()
	xs = machine.pop()
	if isinstance(xs, syntax.Block): machine.push(_block_item(xs, i))
	elif isinstance(xs, syntax.Constant): machine.push(_digit(xs, i))
	else: raise TypeMismatch("Cannot index into %s" % xs, xs)

def _block_item(xs:syntax.Block, i:float) -> syntax.Value:
	if not math.isfinite(i) or not 0 <= math.floor(i) < len(xs):
		raise IndexOutOfRange("Index %s is outside a block of %d" % (syntax.number_text(i), len(xs)), xs)
	return xs[math.floor(i)]

def _digit(xs:syntax.Constant, i:float) -> syntax.Constant:
	""" Decimal digit i of the integer part, counting from the units; zero beyond the end. """
	number = xs.numeric()
	if not math.isfinite(number):
		raise InvalidOperand("Cannot take digits of %r" % xs.text, xs)
	digits = str(abs(math.floor(number)))
	if not math.isfinite(i) or not 0 <= math.floor(i) < len(digits):
		return syntax.Constant("0")
	return syntax.Constant(digits[-1 - math.floor(i)])

@_builtin("?", "if <t>, <f>, <p>")
def _if(machine:Machine):
	predicate = machine.pop()
	if isinstance(predicate, syntax.Constant): machine.push(predicate)
	else: invoke(predicate, machine)
	cond = machine.pop()
	otherwise = machine.pop()
	then = machine.pop()
	if not isinstance(cond, syntax.Constant):
		raise TypeMismatch("A condition must come out as a constant, not %s" % cond, cond)
	invoke(then if cond.is_truthy() else otherwise, machine)

@_builtin(":", "define <x>, <n>")
def _define(machine:Machine):
	name = machine.pop_raw()
	value = machine.pop()
	if not isinstance(name, syntax.Constant):
		raise TypeMismatch("Only a word can name a definition, not %s" % name, name)
	machine.dict[name.text] = value

###############################################################################

BUILTINS = MappingProxyType(dict(_table))
