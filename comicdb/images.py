"""
Image ingestion: turn uploaded bytes into a data URI that can be stored in image fields.
"""

import base64
import mimetypes
from typing import Optional

DEFAULT_MIME_TYPE = 'application/octet-stream'


def guess_mime_type(filename: Optional[str]) -> str:
	"""MIME type from a filename extension, or the generic binary type."""
	if filename:
		mime_type, _ = mimetypes.guess_type(filename)
		if mime_type:
			return mime_type
	return DEFAULT_MIME_TYPE


def to_data_uri(data: bytes, mime_type: Optional[str] = None, filename: Optional[str] = None) -> str:
	"""Encode raw bytes as data:<mime>;base64,<payload>."""
	mime_type = mime_type or guess_mime_type(filename)
	payload = base64.b64encode(data).decode('ascii')
	return f"data:{mime_type};base64,{payload}"
