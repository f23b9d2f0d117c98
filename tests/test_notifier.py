from core.notifier import NoticeBoard
from model.notice import Notice, NoticeCode, NoticeLevel


def _notice(kind: str, code: NoticeCode = NoticeCode.started) -> Notice:
    return Notice(kind=kind, level=NoticeLevel.info, code=code, message=code.value)


def test_notice_board_keeps_latest_first():
    board = NoticeBoard(capacity=3)
    for code in (NoticeCode.started, NoticeCode.busy, NoticeCode.refused, NoticeCode.denied):
        board.notify(_notice("news", code))

    recent = board.recent()

    assert [n.code for n in recent] == [NoticeCode.denied, NoticeCode.refused, NoticeCode.busy]


def test_notice_board_filters_by_kind():
    board = NoticeBoard()
    board.notify(_notice("news"))
    board.notify(_notice("fund_news"))
    board.notify(_notice("news", NoticeCode.stop_requested))

    assert [n.code for n in board.recent("news", limit=1)] == [NoticeCode.stop_requested]
    assert len(board.recent("fund_news")) == 1

    board.clear()
    assert board.recent() == []
