"""Test QR payload building, parsing and rendering."""
import base64
import json

import pytest

from scanroll.services.qr_service import QRService, ScanPayload

STUDENT = {
    'id': 7,
    'name': 'Juan Dela Cruz',
    'student_id': 'LRN001',
    'section': 'Grade 4A',
    'teacher_id': 'T1',
}

def test_build_payload_uses_wire_field_names():
    data = json.loads(QRService.build_payload(STUDENT))
    assert data == {
        'name': 'Juan Dela Cruz',
        'studentId': 'LRN001',
        'section': 'Grade 4A',
        'ownerTeacherId': 'T1',
    }

def test_built_payload_parses_back():
    parsed, error = QRService.parse_payload(QRService.build_payload(STUDENT))
    assert error is None
    assert parsed == ScanPayload('Juan Dela Cruz', 'LRN001', 'Grade 4A', 'T1')

def test_parse_reports_missing_field():
    parsed, error = QRService.parse_payload('{"name": "Juan", "studentId": "LRN001", "section": "4A"}')
    assert parsed is None
    assert error == 'Missing field: ownerTeacherId'

def test_parse_rejects_non_json_text():
    parsed, error = QRService.parse_payload('https://example.com/student/LRN001')
    assert parsed is None
    assert error == 'Invalid QR code format'

@pytest.mark.parametrize('raw', ['9' * 5000, '[' * 100000])
def test_parse_rejects_pathological_json(raw):
    parsed, error = QRService.parse_payload(raw)
    assert parsed is None
    assert error == 'Invalid QR code format'

def test_parse_trims_whitespace_and_accepts_bytes():
    raw = json.dumps({
        'name': ' Juan ', 'studentId': ' LRN001 ', 'section': '4A', 'ownerTeacherId': 'T1'
    }).encode('utf-8')
    parsed, error = QRService.parse_payload(raw)
    assert error is None
    assert parsed.student_id == 'LRN001'
    assert parsed.name == 'Juan'

def test_render_image_returns_png_data_uri():
    uri = QRService.render_image(QRService.build_payload(STUDENT), box_size=2, border=1)
    prefix = 'data:image/png;base64,'
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):])[:8] == b'\x89PNG\r\n\x1a\n'
