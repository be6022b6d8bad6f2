"""
Shared-secret gate in front of the admin views.
This is a convenience lock, not a security boundary: the stored key is only a salted base64 encoding.
"""

import base64
import binascii

from loguru import logger

SALT = 'kocca_'


def encode_secret(secret: str, salt: str = SALT) -> str:
	"""Encode a secret the way the stored admin key is produced."""
	return base64.b64encode((salt + secret.strip()).encode('utf-8')).decode('ascii')


class AccessGate:
	def __init__(self, encoded_key: str, salt: str = SALT):
		self.encoded_key = encoded_key  # salted + base64 encoded secret
		self.salt = salt

	def check(self, candidate: str) -> bool:
		"""True when the candidate (surrounding whitespace ignored) matches the stored key."""
		try:
			ok = encode_secret(candidate or '', self.salt) == self.encoded_key
		except (UnicodeError, binascii.Error) as e:
			logger.warning(f"[AccessGate] Could not encode candidate: {e}")
			return False
		if not ok:
			logger.info("[AccessGate] Rejected admin login attempt")
		return ok
