from boarddraw.models.board_block import BoardBlock
from boarddraw.models.board_category import BoardCategory
from boarddraw.models.board_event import BoardEvent
from boarddraw.models.board_game import BoardGame
from boarddraw.models.board_match import BoardMatch
from boarddraw.models.board_match_player import BoardMatchPlayer
from boarddraw.models.board_player import BoardPlayer

__all__ = [
    "BoardEvent",
    "BoardCategory",
    "BoardGame",
    "BoardBlock",
    "BoardPlayer",
    "BoardMatch",
    "BoardMatchPlayer",
]
