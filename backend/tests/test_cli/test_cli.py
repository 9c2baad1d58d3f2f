"""
Tests for the webstore-reports command line entry point
"""
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

import pytest

from webstore import cli


@pytest.fixture
def fake_db(mock_conn):
    """Patch db_connection to yield mock_conn and record the URL it got"""
    calls = []

    @contextmanager
    def fake_db_connection(database_url=None):
        calls.append(database_url)
        yield mock_conn

    with patch.object(cli, 'db_connection', fake_db_connection):
        yield calls


class TestCli:

    def test_list_reports(self, capsys):
        assert cli.main(['--list']) == 0

        out = capsys.readouterr().out
        assert " 1. List All Customers" in out
        assert "10. Electronics Category Cross-Report" in out

    def test_rejects_unknown_report_number(self):
        with pytest.raises(SystemExit) as exc:
            cli.main(['--report', '11'])

        assert exc.value.code == 2

    def test_runs_all_reports_by_default(self, fake_db):
        with patch.object(cli, 'ReportGenerator') as generator_cls:
            assert cli.main([]) == 0

        generator = generator_cls.return_value
        assert [c.args[0] for c in generator.run_report.call_args_list] == list(range(1, 11))
        assert fake_db == [None]

    def test_runs_selected_reports_with_options(self, fake_db, mock_conn):
        with patch.object(cli, 'ReportGenerator') as generator_cls:
            code = cli.main(['-r', '4', '-r', '9', '--date-format', '%Y-%m-%d',
                             '--database-url', 'postgresql://example/db'])

        assert code == 0
        generator_cls.assert_called_once_with(mock_conn, date_format='%Y-%m-%d')
        assert [c.args[0] for c in generator_cls.return_value.run_report.call_args_list] == [4, 9]
        assert [c.kwargs['separate'] for c in generator_cls.return_value.run_report.call_args_list] == [False, True]
        assert fake_db == ['postgresql://example/db']

    def test_failing_report_does_not_stop_the_rest(self, fake_db, mock_conn):
        with patch.object(cli, 'ReportGenerator') as generator_cls:
            generator_cls.return_value.run_report.side_effect = [None, RuntimeError("boom"), None]
            code = cli.main(['-r', '1', '-r', '2', '-r', '3'])

        assert code == 1
        assert generator_cls.return_value.run_report.call_count == 3
        mock_conn.rollback.assert_called_once()

    def test_connection_failure_exits_with_error(self):
        @contextmanager
        def failing_db_connection(database_url=None):
            raise Exception("DATABASE_URL not configured")
            yield

        with patch.object(cli, 'db_connection', failing_db_connection):
            assert cli.main(['-r', '1']) == 1

    def test_run_reports_counts_failures(self, mock_conn):
        generator = MagicMock()
        generator.run_report.side_effect = RuntimeError("down")

        assert cli.run_reports(generator, mock_conn, [1, 2]) == 2
        assert mock_conn.rollback.call_count == 2
