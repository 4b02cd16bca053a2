from block_stack.game import (
    ActivePiece,
    BlockStackGame,
    GameConfig,
    NextPiece,
    TetrominoType,
    rotate_clockwise,
)


def started_game(seed=0, **kwargs):
    game = BlockStackGame(GameConfig(random_seed=seed), **kwargs)
    game.start()
    return game


def put_piece(game, kind, x=None, y=0, turns=0):
    """Replace the falling piece with ``kind`` rotated ``turns`` times clockwise."""
    piece = ActivePiece.from_template(NextPiece(kind), game.grid.width)
    shape = piece.shape
    for _ in range(turns):
        shape = rotate_clockwise(shape)
    piece.shape = shape
    if x is not None:
        piece.x = x
    piece.y = y
    game.current_piece = piece
    return piece


def fill_row(game, row, skip=(), value=int(TetrominoType.O)):
    for x in range(game.grid.width):
        if x not in skip:
            game.grid.grid[row, x] = value
