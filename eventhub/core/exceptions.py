# File: eventhub/core/exceptions.py
"""
Errors raised by the QR issuance, scan and attendance services.

Each carries the HTTP status the API layer should answer with. Messages are
safe to show to the client; verification failures always use the same
generic text.
"""


class QRServiceError(Exception):
    status_code = 500
    default_message = "QR code operation failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidQRCode(QRServiceError):
    status_code = 400
    default_message = "Invalid or expired QR code"


class ScanForbidden(QRServiceError):
    status_code = 403
    default_message = "Insufficient permissions to scan QR codes"


class RecordNotFound(QRServiceError):
    status_code = 404
    default_message = "Record not found"


class AttendanceConflict(QRServiceError):
    status_code = 409
    default_message = "Already checked in"


class QREncodingError(QRServiceError):
    status_code = 500
    default_message = "Failed to generate QR code"


class AttendanceRejected(QRServiceError):
    status_code = 400
    default_message = "Attendance cannot be recorded"
