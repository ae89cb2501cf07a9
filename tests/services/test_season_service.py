import pytest
import requests
from unittest.mock import MagicMock

from services.season_service import SeasonService, extract_show_titles
from utils.errors import SeasonListError

SEASON_PAGE = """
<html><body>
<div class="header">Current Season</div>
<div class="shows-wrapper">
  <div class="ind-show"><a href="/shows/a">Show A</a></div>
  <div class="ind-show"><a href="/shows/b">Show B – The Sequel</a></div>
  <div class="ind-show"><a href="/shows/c">Hero’s Journey</a></div>
  <div class="ind-show"><a href="/shows/a">Show A</a></div>
</div>
</body></html>
"""


def test_extract_show_titles():
    assert extract_show_titles(SEASON_PAGE) == ["Show A", "Show B - The Sequel", "Hero's Journey"]


def test_extract_show_titles_custom_selector():
    html = "<ul id='list'><li>One</li>\n<li>Two</li></ul>"
    assert extract_show_titles(html, "#list") == ["One", "Two"]


def test_extract_show_titles_missing_wrapper():
    with pytest.raises(SeasonListError):
        extract_show_titles("<html><body><p>maintenance</p></body></html>")


def test_fetch_current_season_titles(mocker):
    response = MagicMock(text=SEASON_PAGE)
    mock_get = mocker.patch("services.season_service.requests.get", return_value=response)

    titles = SeasonService("https://season.example/", timeout=3).fetch_current_season_titles()

    mock_get.assert_called_once_with("https://season.example/", timeout=3)
    assert titles[0] == "Show A"


def test_fetch_current_season_titles_request_error(mocker):
    mocker.patch(
        "services.season_service.requests.get",
        side_effect=requests.exceptions.Timeout("slow"),
    )
    with pytest.raises(SeasonListError):
        SeasonService("https://season.example/").fetch_current_season_titles()
