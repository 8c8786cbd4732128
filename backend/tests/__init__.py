# Force SQLModel table registration at test discovery time
# so every board table exists before any test database is created
from boarddraw.models.board_block import BoardBlock  # noqa: F401
from boarddraw.models.board_category import BoardCategory  # noqa: F401
from boarddraw.models.board_event import BoardEvent  # noqa: F401
from boarddraw.models.board_game import BoardGame  # noqa: F401
from boarddraw.models.board_match import BoardMatch  # noqa: F401
from boarddraw.models.board_match_player import BoardMatchPlayer  # noqa: F401
from boarddraw.models.board_player import BoardPlayer  # noqa: F401
