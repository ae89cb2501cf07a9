from utils.config import validate_configuration, ConfigValidator, ErrorCode


def _valid_config():
    return {
        "feed": {
            "url": "https://feed.example/rss",
            "search_url": "https://feed.example/rss?q={query}",
            "poll_interval": "60",
        },
        "season": {"url": "https://season.example/"},
        "player": {"path": "/usr/bin/player"},
        "preferences": {"resolution": "720p"},
    }


def test_valid_configuration():
    result = validate_configuration(_valid_config())
    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []


def test_missing_section_and_key():
    config = _valid_config()
    del config["season"]
    config["player"]["path"] = "  "

    result = ConfigValidator().validate(config)

    codes = {(error.section, error.error_code) for error in result.errors}
    assert ("season", ErrorCode.MISSING_SECTION) in codes
    assert ("player", ErrorCode.MISSING_KEY) in codes
    assert not result.is_valid


def test_invalid_resolution():
    config = _valid_config()
    config["preferences"]["resolution"] = "4k"
    result = validate_configuration(config)
    assert [error.key for error in result.errors] == ["resolution"]
    assert "480p" in str(result.errors[0])


def test_invalid_url_and_interval():
    config = _valid_config()
    config["feed"]["url"] = "ftp://feed.example"
    config["feed"]["poll_interval"] = "0"
    result = validate_configuration(config)
    assert {error.key for error in result.errors} == {"url", "poll_interval"}


def test_search_url_without_placeholder_warns():
    config = _valid_config()
    config["feed"]["search_url"] = "https://feed.example/rss"
    result = validate_configuration(config)
    assert result.is_valid
    assert len(result.warnings) == 1


def test_empty_configuration():
    result = validate_configuration({})
    assert len(result.errors) == 4
