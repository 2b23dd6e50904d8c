"""사용 예제 실행 테스트"""

import pytest
import structlog

import example_usage


@pytest.fixture(autouse=True)
def reset_structlog(monkeypatch):
    monkeypatch.delenv("BILL_LEDGER_LOG_LEVEL", raising=False)
    yield
    structlog.reset_defaults()


class TestExampleUsage:
    """example_usage.py 테스트"""

    def test_main_output_has_no_debug_logs(self, capsys):
        """기본 INFO 레벨이라 변경 로그가 예제 출력에 섞이지 않음"""
        example_usage.main()

        output = capsys.readouterr().out
        assert "예제 1" in output
        assert "예제 2" in output
        assert "line_item_added" not in output
        assert "discount_registered" not in output
        assert "tax_added" not in output
