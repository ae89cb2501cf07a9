"""
External video player launcher.
"""
import logging
import subprocess
from typing import Optional

from models.episode import EpisodeRecord
from services.db_implementations.db_interface import DatabaseInterface
from utils.errors import PlayerLaunchError

logger = logging.getLogger(__name__)


class PlayerService:
    """
    Opens torrent links in a local video player.

    The player executable is run with the torrent link as its only argument and
    the call blocks until the player exits.
    """

    def __init__(self, player_path: str):
        self.player_path = player_path

    def __str__(self):
        return f"PlayerService(player_path={self.player_path})"

    def open_episode(self, torrent_link: str) -> None:
        """
        Run the player on a torrent link and wait for it to exit.

        Raises:
            PlayerLaunchError: If the player is missing, cannot be started or exits non-zero.
        """
        if not self.player_path:
            raise PlayerLaunchError("No video player configured")

        logger.info(f"Launching {self.player_path} for {torrent_link}")
        try:
            completed = subprocess.run([self.player_path, torrent_link], capture_output=True, text=True)
        except FileNotFoundError as e:
            raise PlayerLaunchError(f"Video player not found: {self.player_path}") from e
        except OSError as e:
            raise PlayerLaunchError(f"Failed to start video player {self.player_path}: {e}") from e

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            logger.error(f"Player exited with code {completed.returncode}: {stderr}")
            raise PlayerLaunchError(f"Video player exited with code {completed.returncode}")
        logger.debug("Player exited cleanly")


def play_episode(db: DatabaseInterface, player: PlayerService, episode_id: int) -> EpisodeRecord:
    """
    Open a stored episode and flag it as watched once the player succeeds.

    Args:
        db (DatabaseInterface): Episode store.
        player (PlayerService): Player launcher.
        episode_id (int): Database ID of the episode.

    Returns:
        EpisodeRecord: The episode that was played.

    Raises:
        KeyError: If no such episode is stored.
        PlayerLaunchError: If the player fails; the episode stays unwatched.
    """
    episode: Optional[EpisodeRecord] = db.get_episode_by_id(episode_id)
    if episode is None:
        raise KeyError(f"No episode with id {episode_id}")

    player.open_episode(episode.torrent_link)
    db.flag_episode_as_watched(episode.id)
    return episode
