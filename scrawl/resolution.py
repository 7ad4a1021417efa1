"""
Name resolution: what a bare word means at this moment.

Builtins win over the user's dictionary, and the dictionary wins over the literal.
Nothing is memoized. A word resolves afresh each time it is popped or evaluated,
so a later definition changes the meaning of code that was read long before.
"""
from typing import Mapping
from . import syntax

def resolve(value:syntax.Value, builtins:Mapping[str, syntax.Operator], dictionary:Mapping[str, syntax.Value]) -> syntax.Value:
	if not isinstance(value, syntax.Constant): return value
	text = value.text
	if text in builtins: return builtins[text]
	if text in dictionary: return dictionary[text]
	return value
