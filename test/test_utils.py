from clinvar_vcv.utils import ensure_list, make_progress_logger


class ListLogger:
    def __init__(self):
        self.messages = []

    def info(self, msg):
        self.messages.append(msg)


def test_ensure_list():
    assert ensure_list("foo") == ["foo"]
    assert ensure_list(["foo"]) == ["foo"]
    assert ensure_list(None) == [None]
    d = {"$": "foo"}
    assert ensure_list(d) == [d]


def test_make_progress_logger():
    logger = ListLogger()
    log_progress = make_progress_logger(
        logger=logger, fmt="Read {elapsed_value}. Total: {current_value}.", interval=3600
    )
    log_progress(0)  # initialize
    log_progress(5)
    assert logger.messages == []

    log_progress(7, force=True)
    assert logger.messages == ["Read 7. Total: 7."]

    log_progress(10, force=True)
    assert logger.messages[-1] == "Read 3. Total: 10."
