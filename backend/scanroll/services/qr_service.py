"""Student QR payload encoding, decoding and rendering."""
import base64
import io
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

import qrcode

REQUIRED_FIELDS = ('name', 'studentId', 'section', 'ownerTeacherId')

# Codes printed before the owner field was renamed carry ``teacherId``
LEGACY_FIELD_ALIASES = {'teacherId': 'ownerTeacherId'}

@dataclass(frozen=True)
class ScanPayload:
    """Decoded content of a student's QR code.

    Nothing here is trusted: ``name`` and ``section`` are display hints and
    ``student_id`` must still be checked against the scanning teacher's
    roster.
    """
    name: str
    student_id: str
    section: str
    owner_teacher_id: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'studentId': self.student_id,
            'section': self.section,
            'ownerTeacherId': self.owner_teacher_id,
        }

class QRService:
    """Service for QR code operations."""

    @staticmethod
    def build_payload(student: Dict[str, Any]) -> str:
        """Serialize a roster document into the text stored in its QR code."""
        payload = ScanPayload(
            name=student['name'],
            student_id=student['student_id'],
            section=student['section'],
            owner_teacher_id=student['teacher_id'],
        )
        return json.dumps(payload.to_dict(), separators=(',', ':'))

    @staticmethod
    def render_image(data: str, box_size: int = 10, border: int = 4) -> str:
        """Render ``data`` as a PNG data URI."""
        qr = qrcode.QRCode(
            version=None,  # Auto-determine size
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=box_size,
            border=border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffered = io.BytesIO()
        img.save(buffered, format="PNG")
        img_str = base64.b64encode(buffered.getvalue()).decode()

        return f"data:image/png;base64,{img_str}"

    @staticmethod
    def parse_payload(raw: Union[str, bytes, Dict[str, Any]]) -> Tuple[Optional[ScanPayload], Optional[str]]:
        """
        Decode a scanned payload.
        Returns: (payload, error_message)
        """
        if isinstance(raw, bytes):
            try:
                raw = raw.decode('utf-8')
            except UnicodeDecodeError:
                return None, "QR code is not valid text"

        if isinstance(raw, str):
            try:
                data = json.loads(raw)
            except (ValueError, RecursionError):
                # JSONDecodeError, oversized integers and deep nesting
                return None, "Invalid QR code format"
        else:
            data = raw

        if not isinstance(data, dict):
            return None, "Invalid QR code format"

        data = dict(data)
        for legacy, current in LEGACY_FIELD_ALIASES.items():
            if current not in data and legacy in data:
                data[current] = data.pop(legacy)

        for field_name in REQUIRED_FIELDS:
            if field_name not in data:
                return None, f"Missing field: {field_name}"
            if not isinstance(data[field_name], str):
                return None, f"Field {field_name} must be text"

        student_id = data['studentId'].strip()
        if not student_id:
            return None, "Missing field: studentId"

        return ScanPayload(
            name=data['name'].strip(),
            student_id=student_id,
            section=data['section'].strip(),
            owner_teacher_id=data['ownerTeacherId'].strip(),
        ), None
