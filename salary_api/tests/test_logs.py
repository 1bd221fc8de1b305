import json
import logging

from salary_api.logs import LogContext


def test_write_emits_json_record(caplog):
    log = LogContext("SALARY_QUERY")
    log.set_entity("year", "2019")
    log.set_payload({"year": "2019", "page": "2"})
    log.set_after({"count": 25, "rows": 10})
    with caplog.at_level(logging.INFO, logger="salary_api.oplog"):
        rec = log.write("OK")

    assert rec["action"] == "SALARY_QUERY"
    assert rec["entity_type"] == "year" and rec["entity_id"] == "2019"
    assert rec["result"] == "OK" and rec["err_msg"] is None
    assert rec["latency_ms"] >= 0

    [logged] = [r for r in caplog.records if r.name == "salary_api.oplog"]
    assert logged.levelno == logging.INFO
    assert json.loads(logged.getMessage())["request_id"] == log.request_id


def test_error_result_logged_as_warning(caplog):
    with caplog.at_level(logging.INFO, logger="salary_api.oplog"):
        LogContext("SALARY_QUERY").write("ERROR", "Invalid Year Supplied")
    [logged] = [r for r in caplog.records if r.name == "salary_api.oplog"]
    assert logged.levelno == logging.WARNING
    assert json.loads(logged.getMessage())["err_msg"] == "Invalid Year Supplied"
