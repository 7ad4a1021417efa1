"""
A light-weight way to pass around points and spans within a collection of program texts.
The concept is simple: Use integers, with spans of them associated to specific sources.
Program text need not come from a file (it may be typed inline or decoded from a link)
so each segment remembers its text as well as its path.
"""
from bisect import bisect_right
from pathlib import Path
from typing import NamedTuple, Optional

class Segment(NamedTuple):
	path: Optional[Path]
	text: str

	def label(self):
		return str(self.path) if self.path is not None else "<program text>"

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	segment: Segment
	slice: slice

_slices: list[slice] = []
_bounds: list[int] = []
_segments: list[Segment] = []

def reset_location_index():
	for it in _slices, _bounds, _segments: it.clear()
	# Now prepare the "built-in" location, which is location zero:
	start_segment(None, "")
	insert_token(slice(0,0))

def start_segment(path:Optional[Path], text:str):
	assert isinstance(path, Path) or path is None
	_bounds.append(len(_slices))
	_segments.append(Segment(path, text))

def insert_token(s:slice) -> int:
	index = len(_slices)
	_slices.append(s)
	return index

def lookup_token(index:int) -> Span:
	segment_index = bisect_right(_bounds, index)-1
	return Span(_segments[segment_index], _slices[index])

def lookup_span(first: int, last:int) -> Span:
	left = lookup_token(first)
	right = lookup_token(last)
	assert left.segment is right.segment
	return Span(left.segment, slice(left.slice.start, right.slice.stop))

reset_location_index()
