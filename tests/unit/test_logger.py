import io

from logger import Logger


def test_logger_filters_levels() -> None:
    stream = io.StringIO()
    logger = Logger(level="WARN", stream=stream)
    logger.info("hidden")
    logger.warn("shown")
    logger.error("also shown")
    assert stream.getvalue().splitlines() == ["shown", "also shown"]


def test_logger_notifies_observers() -> None:
    events = []
    logger = Logger(stream=io.StringIO())
    logger.subscribe(lambda level, message: events.append((level, message)))
    logger.debug("too quiet")
    logger.info("matched")
    logger.warn("imprecise")
    assert events == [("INFO", "matched"), ("WARN", "imprecise")]


def test_logger_unsubscribe() -> None:
    events = []
    logger = Logger(stream=io.StringIO())

    def observer(level, message):
        events.append(message)

    logger.subscribe(observer)
    logger.unsubscribe(observer)
    logger.info("nothing")
    assert events == []
