import logging

from logger_manager import configure_logging, log_error, log_info, log_request, logger


def test_configure_logging_is_idempotent():
    handlers = list(logger.handlers)

    configure_logging()

    assert logger.handlers == handlers


def test_log_error_keeps_traceback(caplog):
    caplog.set_level(logging.DEBUG, logger="transparency_api")
    try:
        raise RuntimeError("store unavailable")
    except RuntimeError as e:
        log_error("Error in read_report endpoint", e)

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.exc_info[1].args == ("store unavailable",)


def test_records_point_at_the_caller(caplog):
    caplog.set_level(logging.DEBUG, logger="transparency_api")

    log_info("from the test module")

    assert caplog.records[-1].pathname.endswith("test_logger_manager.py")


def test_log_request_levels(caplog):
    caplog.set_level(logging.DEBUG, logger="transparency_api")

    log_request("GET", "http://testserver/api/reports", 200, 3.21)
    log_request("POST", "http://testserver/api/reports", 500, 12.0)

    ok, failed = caplog.records[-2:]
    assert ok.levelno == logging.INFO
    assert ok.getMessage() == "Request: GET http://testserver/api/reports -> 200 (3.2 ms)"
    assert failed.levelno == logging.WARNING
