from cli.init_db import init_db


def test_init_db(runner, mock_obj):
    result = runner.invoke(init_db, [], obj=mock_obj)
    assert result.exit_code == 0
    mock_obj['db'].initialize.assert_called_once()


def test_init_db_dry_run(runner, mock_obj):
    mock_obj['dry_run'] = True
    result = runner.invoke(init_db, [], obj=mock_obj)
    assert result.exit_code == 0
    assert "DRY RUN" in result.output
    mock_obj['db'].initialize.assert_not_called()


def test_init_db_without_services(runner):
    result = runner.invoke(init_db, [], obj={"config": None, "dry_run": False, "config_error": "Configuration file not found: x"})
    assert result.exit_code != 0
    assert "Configuration file not found" in result.output
