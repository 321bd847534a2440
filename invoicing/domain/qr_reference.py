"""Payment references and account formatting

- QR reference (QRR): 26 digits + recursive modulo 10 check digit
- Creditor reference (SCOR, ISO 11649): "RF" + 2 check digits + up to 21 chars
- QR-IBAN: CH/LI IBAN whose institution id lies in 30000-31999

Check digit arithmetic comes from python-stdnum, the same modules qrbill
validates the payment slip with.
"""

import re
from stdnum import iban, iso11649
from stdnum.ch import esr
from stdnum.iso7064 import mod_97_10

QR_IID_START = 30000
QR_IID_END = 31999


def make_qr_reference(digits: str) -> str:
    """
    Build a 27-digit QR reference from up to 26 digits

    Non-digits are dropped and the body is left-padded with zeros.
    """
    body = re.sub(r"\D", "", digits or "")
    if len(body) > 26:
        raise ValueError("QR reference body exceeds 26 digits")
    body = body.zfill(26)
    return body + esr.calc_check_digit(body)


def make_creditor_reference(body: str) -> str:
    """Build an ISO 11649 creditor reference ("RF..") from an alphanumeric body"""
    body = re.sub(r"[^A-Z0-9]", "", (body or "").upper())
    if not body or len(body) > 21:
        raise ValueError("Creditor reference body must be 1-21 alphanumeric characters")
    return f"RF{mod_97_10.calc_check_digits(body + 'RF')}{body}"


def is_qr_iban(account: str) -> bool:
    """A valid CH/LI IBAN whose institution id (QR-IID) lies in 30000-31999"""
    value = iban.compact(account or "")
    if value[:2] not in ("CH", "LI") or not iban.is_valid(value):
        return False
    return QR_IID_START <= int(value[4:9]) <= QR_IID_END


def format_iban(account: str) -> str:
    """IBAN in blocks of four characters"""
    return iban.format(account or "")


def format_reference(reference: str) -> str:
    """
    Human readable reference

    QR references are grouped 2 + 5x5 digits, creditor references in blocks
    of four characters.
    """
    ref = "".join((reference or "").split()).upper()
    if not ref:
        return ""
    if ref.startswith("RF"):
        return iso11649.format(ref)
    if len(ref) == 27 and ref.isdigit():
        return esr.format(ref)
    return ref
