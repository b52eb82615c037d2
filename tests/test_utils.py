from utils.time_utils import calculate_expiry, is_expired, to_epoch_millis, format_timestamp
from utils.validation_utils import normalize_phone, generate_numeric_code, message_matches_code
from app.services.sms_service import format_verification_sms


def test_normalize_phone():
    assert normalize_phone("+1 (555) 123-4567") == "+15551234567"
    assert normalize_phone(" +15551234567 ") == "+15551234567"
    assert normalize_phone("555.123.4567") == "5551234567"
    assert normalize_phone(None) == ""


def test_generate_numeric_code():
    for length in (4, 6, 10):
        code = generate_numeric_code(length)
        assert len(code) == length
        assert code.isdigit()


def test_message_matches_code():
    assert message_matches_code("4821", "4821")
    assert message_matches_code("4821", "Your code is 4821")
    assert not message_matches_code("4821", "482")
    assert not message_matches_code("4821", None)
    assert not message_matches_code("", "anything")


def test_expiry_helpers():
    assert calculate_expiry(100.0, 300) == 400.0
    assert not is_expired(400.0, 399.9)
    assert is_expired(400.0, 400.0)
    assert to_epoch_millis(1700000000.25) == 1700000000250
    assert to_epoch_millis(None) is None
    assert format_timestamp(0) == "1970-01-01 00:00:00"
    assert format_timestamp(None) == "N/A"


def test_format_verification_sms():
    body = format_verification_sms("482193", "FA+9qCX9VSu")
    assert body == "[#] Use 482193 as your code for the app!\nFA+9qCX9VSu"
