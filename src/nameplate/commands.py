""" Command argument handling for player names. """

import logging
from typing import List, Optional, Protocol, Iterable

from nameplate import util

class UserError(Exception):
    pass

class Player(Protocol):
    @property
    def name(self) -> str: ...

class Server(Protocol):
    def get_player_exact(self, name:str) -> Optional[Player]: ...
    def online_players(self) -> Iterable[Player]: ...

class PlayerArgumentProvider:
    """ Turns a typed name into an online player, and completes names.

    Tab completion can run on any thread while players join and quit, so we
    copy the online players before walking them. """

    def __init__(self, server:Server) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.server = server

    def provide(self, name:str, sender:Optional[Player]=None, optional:bool=False) -> Player:
        player = self.server.get_player_exact(name)
        if player is not None:
            return player

        # an optional player argument falls back to whoever is asking
        if optional and sender is not None:
            return sender

        raise UserError(f"No player online with name '{name}'.")

    def suggestions(self, prefix:str) -> List[str]:
        prefix = prefix.lower()
        try:
            players = list(self.server.online_players())
        except RuntimeError as e:
            # collection changed size during iteration
            self.logger.debug(f'online players changed during snapshot: {e}')
            return []

        return [
            p.name for p in players
            if not prefix or p.name.lower().startswith(prefix)
        ]

    def complete(self, partial:str, command:str) -> str:
        """ Completes the last word of command with an online player name. """
        p = partial.split(' ')[-1]
        c = command.split(' ')[-1]
        o = util.tab_complete(p, c, self.suggestions(p)) or p
        return " ".join(command.split(' ')[:-1] + [o])
