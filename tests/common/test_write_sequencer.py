from monthly_tracker.common.write_sequencer import WriteSequencer


def test_latest_write_per_key_is_current():
    seq = WriteSequencer()

    first = seq.begin("a")
    second = seq.begin("a")
    other = seq.begin("b")

    assert first < second < other
    assert not seq.is_current("a", first)
    assert seq.is_current("a", second)
    assert seq.is_current("b", other)


def test_finish_only_settles_latest():
    seq = WriteSequencer()
    first = seq.begin("a")
    second = seq.begin("a")

    assert seq.finish("a", first) is False
    assert seq.is_current("a", second)

    assert seq.finish("a", second) is True
    assert not seq.is_current("a", second)
    assert seq.finish("a", second) is False
