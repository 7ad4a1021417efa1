import sys, random
from functools import lru_cache
from typing import Sequence, Any
from boozetools.support.failureprone import SourceText, illustration

from .location import lookup_span, Segment
from .machine import ScrawlError
from . import syntax

MAX_CALLERS = 8

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Crud', 'Curses', 'Drat', 'Fiddlesticks',
		'Good Grief', 'Great Scott', 'Jeepers', 'Nuts', 'Rats', 'Smudges',
	]

	resignations = [
		'The pen has left the paper.',
		'The turtle stops here.',
		'I have run out of ink.',
		'The drawing stays as far as it got.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects what went wrong, and prints it when asked. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []

	@property
	def issues(self): return tuple(self._issues)
	def sick(self): return bool(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)

	def info(self, *args, level=1):
		if self._verbose >= level:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	# Methods the command line is likely to call:
	def no_such_file(self, path):
		self.issue(Pic("I see no file called %s" % path, []))

	def broken_file(self, path):
		self.issue(Pic("Something went pear-shaped while trying to read %s" % path, []))

	def broken_link(self, url:str):
		intro = "This link carries no program I can read:"
		self.issue(Pic(intro, [], ["    "+url]))

	def run_time_error(self, ex:ScrawlError):
		"""
		The crash site comes last, after the chain of blocks that led to it.
		Values computed at run-time have no place in the source, so they get described instead.
		"""
		callers = [v for v in ex.trail[:-1] if v.is_located()]
		footer = []
		if len(callers) > MAX_CALLERS:
			footer.append("(%d more calls further out are not shown.)" % (len(callers) - MAX_CALLERS))
			callers = callers[-MAX_CALLERS:]
		problem = [Annotation(v, "called from here") for v in callers]
		if ex.trail and ex.trail[-1].is_located():
			problem.append(Annotation(ex.trail[-1], "failed here"))
		culprit = ex.culprit
		if culprit is not None:
			if culprit.is_located(): problem.append(Annotation(culprit, "this one"))
			else: footer.append("The value at fault was computed: %s" % culprit)
		self.issue(Pic("%s: %s" % (type(ex).__name__, ex.message), problem, footer))

	def trace_step(self, value:syntax.Value, depth:int):
		if self._verbose < 2: return
		if value.is_located():
			ann = Annotation(value, "stack depth %d" % depth)
			print(ann.illustrate(), file=sys.stderr)
		else:
			print("%s (stack depth %d)" % (value, depth), file=sys.stderr)

class Annotation:
	segment: Segment
	slice: slice
	caption: str
	def __init__(self, node:syntax.Value, caption:str=""):
		first, last = node.span()
		span = lookup_span(first, last)
		if "\n" in span.segment.text[span.slice]:
			span = lookup_span(first, first)  # A block over several lines shows its opening bracket.
		self.segment = span.segment
		self.slice = span.slice
		self.caption = caption
	def illustrate(self):
		source = _fetch(self.segment)
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer:Sequence[str]=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def intro(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		segment = None
		for ann in self._anns:
			if ann.segment is not segment:
				segment = ann.segment
				lines.append(segment.label())
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

@lru_cache(5)
def _fetch(segment:Segment) -> SourceText:
	if segment.path is None:
		return SourceText(segment.text)
	return SourceText(segment.text, filename=str(segment.path))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
