"""
Unit tests for structured and audit log formatting
"""
import json
import logging

from marmoraria.logging_config import AuditFormatter, JSONFormatter, TextFormatter, audit_log


def make_record(msg="Cut registered", level=logging.INFO, **extra):
    record = logging.LogRecord("marmoraria.test", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_json_formatter_includes_extras(self):
        output = json.loads(JSONFormatter().format(make_record(slab_id="CHP-1", area_used=1.5)))

        assert output["message"] == "Cut registered"
        assert output["level"] == "INFO"
        assert output["slab_id"] == "CHP-1"
        assert output["area_used"] == 1.5
        assert "location" not in output

    def test_json_formatter_stringifies_unserializable_values(self):
        output = json.loads(JSONFormatter().format(make_record(when=object())))

        assert isinstance(output["when"], str)

    def test_json_formatter_adds_location_for_errors(self):
        output = json.loads(JSONFormatter().format(make_record(level=logging.ERROR)))

        assert output["location"]["line"] == 10

    def test_text_formatter(self):
        line = TextFormatter().format(make_record(slab_id="CHP-1"))

        assert "[INFO] marmoraria.test: Cut registered slab_id=CHP-1" in line

    def test_audit_formatter_drops_empty_fields(self):
        record = make_record(event="SLAB_DELETED", user_id="USR-1", resource_id=None, details={})
        output = json.loads(AuditFormatter().format(record))

        assert output["event"] == "SLAB_DELETED"
        assert output["user_id"] == "USR-1"
        assert "resource_id" not in output


def test_audit_log_emits_on_audit_logger(caplog):
    audit = logging.getLogger("audit")
    audit.propagate = True
    try:
        with caplog.at_level(logging.INFO, logger="audit"):
            audit_log("SLAB_CREATED", user_id="USR-1", company_id="COMP-1", resource_id="CHP-1")
    finally:
        audit.propagate = False

    record = caplog.records[-1]
    assert record.event == "SLAB_CREATED"
    assert record.company_id == "COMP-1"
    assert record.details == {}
