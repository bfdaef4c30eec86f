"""CancellationCoordinator 테스트"""

from scrollfind.search.cancellation import CancellationCoordinator, CancellationToken


def test_advance_increments_generation():
    coordinator = CancellationCoordinator()

    first = coordinator.advance()
    second = coordinator.advance()

    assert first.generation == 1
    assert second.generation == 2
    assert coordinator.generation == 2


def test_advance_cancels_previous_generation():
    coordinator = CancellationCoordinator()

    first = coordinator.advance()
    second = coordinator.advance()

    assert first.cancelled
    assert not second.cancelled


def test_is_current():
    coordinator = CancellationCoordinator()

    first = coordinator.advance()
    assert coordinator.is_current(first)

    second = coordinator.advance()
    assert not coordinator.is_current(first)
    assert coordinator.is_current(second)


def test_stale_generation_is_not_current_even_if_not_cancelled():
    """게시 판정은 취소 플래그가 아니라 generation 비교에 근거"""
    coordinator = CancellationCoordinator()
    coordinator.advance()
    coordinator.advance()

    stale = CancellationToken(1)

    assert not stale.cancelled
    assert not coordinator.is_current(stale)


def test_cancel_all():
    coordinator = CancellationCoordinator()
    token = coordinator.advance()

    coordinator.cancel_all()

    assert token.cancelled
    assert not coordinator.is_current(token)


def test_cancel_all_without_generation():
    CancellationCoordinator().cancel_all()
