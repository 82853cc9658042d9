import pytest

from naza.circularqueue import CircularQueue, CircularQueueError


def test_empty_queue():
    q = CircularQueue(3)
    with pytest.raises(CircularQueueError):
        q.pop_front()
    with pytest.raises(CircularQueueError):
        q.front()
    with pytest.raises(CircularQueueError):
        q.back()
    with pytest.raises(CircularQueueError):
        q.at(0)
    assert len(q) == 0
    assert q.full() is False
    assert q.empty() is True


def test_circular_queue():
    q = CircularQueue(3)
    q.push_back(1)
    assert q.front() == 1
    assert q.back() == 1
    assert q.at(0) == 1
    assert len(q) == 1
    assert q.full() is False
    assert q.empty() is False

    q.push_back(2)
    q.push_back(3)
    assert q.front() == 1
    assert q.back() == 3
    assert [q.at(i) for i in range(3)] == [1, 2, 3]
    assert len(q) == 3
    assert q.full() is True
    assert q.empty() is False

    assert q.pop_front() == 1
    q.push_back(400)
    with pytest.raises(CircularQueueError):
        q.push_back(500)

    assert q.front() == 2
    assert q.back() == 400
    assert [q.at(i) for i in range(3)] == [2, 3, 400]
    assert list(q) == [2, 3, 400]
    assert len(q) == 3
    assert q.full() is True
    assert q.empty() is False


def test_at_out_of_range():
    q = CircularQueue(2)
    q.push_back("a")
    with pytest.raises(CircularQueueError):
        q.at(1)
    with pytest.raises(CircularQueueError):
        q.at(-1)


def test_zero_capacity_is_full_and_empty():
    q = CircularQueue(0)
    assert q.full() is True
    assert q.empty() is True
    with pytest.raises(CircularQueueError):
        q.push_back(1)