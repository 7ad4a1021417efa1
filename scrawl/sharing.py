"""
Programs travel as links: the text rides base64-encoded in the "prgm" query parameter.
"""
import base64
import binascii
from typing import Optional
from urllib.parse import urlsplit, urlunsplit, parse_qs, urlencode

PARAMETER = "prgm"

def encode_program(text:str) -> str:
	return base64.b64encode(text.encode("utf-8")).decode("ascii")

def decode_program(blob:str) -> Optional[str]:
	try: return base64.b64decode(blob, validate=True).decode("utf-8")
	except (binascii.Error, UnicodeDecodeError): return None

def share_link(text:str, base_url:str) -> str:
	""" Put the program into the link, replacing whatever program was there before. """
	parts = urlsplit(base_url)
	query = parse_qs(parts.query)
	query[PARAMETER] = [encode_program(text)]
	return urlunsplit(parts._replace(query=urlencode(query, doseq=True)))

def program_from_link(url:str) -> Optional[str]:
	found = parse_qs(urlsplit(url).query).get(PARAMETER)
	if not found: return None
	return decode_program(found[0])
