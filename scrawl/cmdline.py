"""
This is an interpreter for Scrawl, a little postfix language that draws.

{0}

For example:

    scrawl examples/demo.scr

will draw whatever demo.scr describes, or else try to explain why not.

    scrawl -e "d 4 [ 100 f 90 r ] c"

draws a square, while

    scrawl -s tk

shows the built-in demo, and

    scrawl -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

from .preamble import DEFAULT_PROGRAM, DEFAULT_WIDTH, DEFAULT_HEIGHT

parser = argparse.ArgumentParser(
	prog="scrawl",
	description="Interpreter for the Scrawl turtle-graphics language.",
)
parser.add_argument("program", nargs="?", help="try examples/demo.scr for example. Without one, you get the demo anyway.")
parser.add_argument('-e', "--eval", metavar="TEXT", help="Run this program text instead of a file.")
parser.add_argument('-l', "--link", metavar="URL", help="Run the program carried by this share link.")
parser.add_argument('-s', "--surface", choices=("tk", "pygame", "none"), default="tk", help="Where to draw. (default: tk)")
parser.add_argument("--size", nargs=2, type=int, metavar=("WIDTH", "HEIGHT"), default=(DEFAULT_WIDTH, DEFAULT_HEIGHT), help="Canvas dimensions.")
parser.add_argument('-c', "--check", action="store_true", help="Read the program and report on it, but do not run it.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what happens.")
parser.add_argument("--trace", action="store_true", help="Show each word as it runs, with the depth of the stack.")
parser.add_argument("--share", metavar="BASE_URL", help="Print a share link for the program instead of running it.")
parser.add_argument("--list", action="store_true", help="List the built-in operators.")

def _program_text(args, report):
	from .sharing import program_from_link
	if args.eval is not None: return args.eval, None
	if args.link is not None:
		text = program_from_link(args.link)
		if text is None: report.broken_link(args.link)
		return text, None
	if args.program is None: return DEFAULT_PROGRAM, None
	path = Path.cwd() / args.program
	try:
		with open(path, "r", encoding="utf-8") as fh: return fh.read(), path
	except FileNotFoundError:
		report.no_such_file(path)
	except (OSError, UnicodeDecodeError):
		report.broken_file(path)
	return None, path

def _make_surface(kind, width, height):
	if kind == "tk":
		from .adapters.turtle_adapter import TkSurface
		return TkSurface(width, height)
	if kind == "pygame":
		from .adapters.game_adapter import PygameSurface
		return PygameSurface(width, height)
	from .adapters.for_test_purposes import NullSurface
	return NullSurface()

def run(args):
	from .diagnostics import Report
	from .front_end import parse_text
	from .location import reset_location_index
	from .machine import ScrawlError
	from .primitive import catalog
	if args.list:
		for line in catalog(): print(line)
		return
	verbose = max(args.verbose or 0, 2 if args.trace else 0)
	report = Report(verbose=verbose)
	text, path = _program_text(args, report)
	if report.sick():
		report.complain_to_console()
		return 1
	if args.share is not None:
		from .sharing import share_link
		print(share_link(text, args.share))
		return
	reset_location_index()
	program = parse_text(text, path)
	report.info("Read %d top-level values." % len(program))
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return
	from .executive import run_program
	width, height = args.size
	surface = _make_surface(args.surface, width, height)
	surface.clear_rect(0, 0, width, height)
	tracer = (lambda value, machine: report.trace_step(value, len(machine.stack))) if args.trace else None
	try:
		x, y = run_program(program, surface, width, height, tracer=tracer)
	except ScrawlError as ex:
		report.run_time_error(ex)
		report.complain_to_console()
		status = 1
	else:
		report.info("The cursor came to rest at (%g, %g)." % (x, y))
		status = None
	surface.finish()
	return status

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
