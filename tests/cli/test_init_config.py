import configparser

from cli.init_config import init_config


def test_init_config_with_options(runner, tmp_path):
    config_path = tmp_path / "conf" / "animewatch.ini"
    result = runner.invoke(init_config, [
        "--feed-url", "https://feed.example/rss",
        "--season-url", "https://season.example/",
        "--player-path", "/usr/bin/player",
        "--resolution", "1080p",
        "--db-file", str(tmp_path / "anime.db"),
    ], obj={"config_path": str(config_path)})

    assert result.exit_code == 0, result.output
    parser = configparser.ConfigParser(interpolation=None)
    parser.read(config_path)
    assert parser["feed"]["url"] == "https://feed.example/rss"
    assert parser["preferences"]["resolution"] == "1080p"
    assert parser["sqlite"]["db_file"] == str(tmp_path / "anime.db")


def test_init_config_prompts(runner, tmp_path):
    config_path = tmp_path / "animewatch.ini"
    answers = "https://feed.example/rss\nhttps://season.example/\n/usr/bin/player\n\n"
    result = runner.invoke(init_config, [], obj={"config_path": str(config_path)}, input=answers)

    assert result.exit_code == 0, result.output
    parser = configparser.ConfigParser(interpolation=None)
    parser.read(config_path)
    assert parser["player"]["path"] == "/usr/bin/player"
    assert parser["preferences"]["resolution"] == "720p"


def test_init_config_refuses_overwrite(runner, tmp_path):
    config_path = tmp_path / "animewatch.ini"
    config_path.write_text("[feed]\nurl = https://old.example/\n")
    result = runner.invoke(init_config, ["--feed-url", "https://new.example/"], obj={"config_path": str(config_path)})
    assert result.exit_code == 1
    assert "old.example" in config_path.read_text()
