from datetime import datetime, timedelta, timezone

from linkdump.dto import DumpMessage, FlushResult, FlushStatus
from linkdump.utils import default_email_address, unix_date


def test_unix_date_pads_day_with_space():
    when = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    assert unix_date(when) == "Mon Jan  2 15:04:05 UTC 2006"


def test_unix_date_two_digit_day_and_named_zone():
    tz = timezone(timedelta(hours=1), "CET")
    when = datetime(2024, 3, 14, 9, 26, 53, tzinfo=tz)
    assert unix_date(when) == "Thu Mar 14 09:26:53 CET 2024"


def test_dump_message_renders_headers_and_numbered_body():
    msg = DumpMessage(
        timestamp=datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc),
        recipient="me@localhost",
        links=("https://a", "https://b"),
    )

    assert msg.subject == "linkdump - Mon Jan  2 15:04:05 UTC 2006"
    assert list(msg.enumerate()) == ["1. https://a", "2. https://b"]
    assert msg.render().endswith("To: me@localhost\n\n1. https://a\n2. https://b\n")


def test_flush_result_committed_only_for_committed_status():
    assert FlushResult(FlushStatus.COMMITTED, 3).committed
    for status in (FlushStatus.EMPTY_QUEUE, FlushStatus.THRESHOLD_NOT_MET, FlushStatus.DELIVERY_FAILED):
        assert not FlushResult(status, 3).committed


def test_default_email_address_falls_back_to_root(monkeypatch):
    def _boom():
        raise KeyError("no such user")

    monkeypatch.setattr("linkdump.utils.getpass.getuser", _boom)
    assert default_email_address() == "root@localhost"

    monkeypatch.setattr("linkdump.utils.getpass.getuser", lambda: "alice")
    assert default_email_address() == "alice@localhost"
