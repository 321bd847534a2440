"""qrcode-backed QR Code Service

Produces the module matrix of a payload; drawing is left to the renderer so
the code stays vector in the PDF.
"""

from typing import List

import qrcode

from invoicing.app.services.qr_code_service import QrCodeService


class QrCodeGenerator(QrCodeService):
    """
    qrcode implementation of QrCodeService

    Error correction level M as required for Swiss QR-bills.
    """

    def __init__(self, error_correction: int = qrcode.constants.ERROR_CORRECT_M):
        self.error_correction = error_correction

    def matrix(self, data: str) -> List[List[bool]]:
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction,
            border=0,
        )
        qr.add_data(data)
        qr.make(fit=True)
        return [[bool(module) for module in row] for row in qr.get_matrix()]
