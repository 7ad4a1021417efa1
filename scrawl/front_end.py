"""
Turn program text into a tree of values.
Words are separated by runs of space, tab, carriage-return, or newline, and nothing else.
Square brackets group words into blocks. Everything else is a constant, to be resolved later.
"""
import re
from pathlib import Path
from typing import Optional

from . import syntax
from .location import start_segment, insert_token

_WORD = re.compile(r"[^ \t\r\n]+")

OPEN, CLOSE = "[", "]"

def parse_text(text:str, path:Optional[Path]=None) -> syntax.Block:
	""" Scan the text into words, noting where each came from, then group the brackets. """
	start_segment(path, text)
	words = [(m.group(), insert_token(slice(m.start(), m.end()))) for m in _WORD.finditer(text)]
	return _group(words)

def parse_file(path:Path) -> syntax.Block:
	with open(path, "r", encoding="utf-8") as fh:
		text = fh.read()
	return parse_text(text, path)

def _group(words) -> syntax.Block:
	"""
	Collect values into blocks. Enclosing blocks wait on a stack while an inner one fills,
	so nesting is as deep as the text cares to go.
	A stray closer at the top level just ends the program; running out of words closes whatever is open.
	"""
	enclosing = []
	opener, items, end = 0, [], 0
	for text, spot in words:
		if text == OPEN:
			enclosing.append((opener, items))
			opener, items, end = spot, [], spot
		elif text == CLOSE:
			if not enclosing: return syntax.Block(items, opener, spot)
			block = syntax.Block(items, opener, spot)
			opener, items = enclosing.pop()
			items.append(block)
			end = block.right()
		else:
			items.append(syntax.Constant(text, spot))
			end = spot
	while enclosing:
		block = syntax.Block(items, opener, end)
		opener, items = enclosing.pop()
		items.append(block)
	return syntax.Block(items, opener, end)
