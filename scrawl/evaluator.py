"""
Run a block against a machine, one value at a time, in program order.

Each value is resolved on the spot. Operators do their thing; everything else lands on the stack.
The trail records what is being run, outermost first. Nothing pops it when a failure
escapes, so after a crash it still describes the road to the crash site.
"""
from . import syntax
from .machine import Machine, TypeMismatch

def evaluate(block:syntax.Block, machine:Machine):
	for value in block:
		step(value, machine)

def step(value:syntax.Value, machine:Machine):
	machine.trail.append(value)
	if machine.tracer is not None: machine.tracer(value, machine)
	meaning = machine.resolve(value)
	if isinstance(meaning, syntax.Operator): meaning.fn(machine)
	else: machine.push(meaning)
	machine.trail.pop()

def invoke(value:syntax.Value, machine:Machine):
	""" Apply whatever was popped: operators run, blocks evaluate, constants are an error. """
	try: fn = INVOKE[type(value)]
	except KeyError: raise NotImplementedError(type(value), value)
	fn(value, machine)

INVOKE = {}

def attach_invocation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_invoke_"):
			_t = _v.__annotations__["value"]
			assert isinstance(_t, type), (_k, _t)
			INVOKE[_t] = _v

###############################################################################

def _invoke_operator(value:syntax.Operator, machine:Machine):
	value.fn(machine)

def _invoke_block(value:syntax.Block, machine:Machine):
	machine.trail.append(value)
	evaluate(value, machine)
	machine.trail.pop()

def _invoke_constant(value:syntax.Constant, machine:Machine):
	raise TypeMismatch("Cannot invoke a constant: %s" % value, value)

attach_invocation_methods(globals())
