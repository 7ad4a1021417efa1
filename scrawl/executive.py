"""
The overall control for a run: read the text, make a fresh machine, go.

Every nested block costs a handful of Python frames, so a run raises the
interpreter's recursion limit while it lasts. Past that, the run fails as TooDeep.
"""
import sys
from typing import Callable, Optional

from . import syntax
from .front_end import parse_text
from .evaluator import evaluate
from .location import reset_location_index
from .machine import Machine, ScrawlError, TooDeep
from .primitive import BUILTINS
from .surface import Surface

TRACER = Callable[[syntax.Value, Machine], None]

RECURSION_LIMIT = 10_000

def execute(program_text:str, surface:Surface, width:float, height:float, *, tracer:Optional[TRACER]=None) -> tuple[float, float]:
	"""
	Run the text to completion and mark where the cursor ended. Returns the final position.
	Source locations from any earlier call are forgotten, so only the latest program can be illustrated.
	"""
	reset_location_index()
	program = parse_text(program_text)
	return run_program(program, surface, width, height, tracer=tracer)

def run_program(program:syntax.Block, surface:Surface, width:float, height:float, *, tracer:Optional[TRACER]=None) -> tuple[float, float]:
	machine = Machine(surface, width, height, BUILTINS)
	machine.tracer = tracer
	limit = sys.getrecursionlimit()
	sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
	try:
		evaluate(program, machine)
	except ScrawlError as ex:
		ex.trail = tuple(machine.trail)
		raise
	except RecursionError:
		ex = TooDeep("Blocks called within blocks more deeply than I can follow.")
		ex.trail = tuple(machine.trail)
		raise ex from None
	finally:
		sys.setrecursionlimit(limit)
	machine.mark_cursor()
	return machine.cursor.position()
