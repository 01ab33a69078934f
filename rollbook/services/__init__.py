"""Record codec and the flat-file credential and student stores."""

from rollbook.services.credentials import CredentialStore
from rollbook.services.record_codec import decode_record, encode_record
from rollbook.services.student_store import StudentStore

__all__ = ["CredentialStore", "StudentStore", "decode_record", "encode_record"]
