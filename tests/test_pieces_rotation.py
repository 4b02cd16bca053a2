import numpy as np

from block_stack.game import (
    BASE_SHAPES,
    ActivePiece,
    GameGrid,
    NextPiece,
    TetrominoType,
    color_for,
    resolve_rotation,
    rotate_clockwise,
)


def test_seven_shapes_of_four_cells_with_colors():
    assert len(BASE_SHAPES) == 7
    for kind, shape in BASE_SHAPES.items():
        assert int(shape.sum()) == 4
        assert color_for(kind).startswith('#')
    assert color_for(TetrominoType.I) == '#00ffff'
    assert color_for(TetrominoType.L) == '#ffa500'


def test_rotate_clockwise_maps_cells():
    m = np.array([[1, 2, 3], [4, 5, 6]])
    assert rotate_clockwise(m).tolist() == [[4, 1], [5, 2], [6, 3]]


def test_rotation_is_order_four_and_leaves_template_alone():
    for kind, template in BASE_SHAPES.items():
        before = template.copy()
        shape = template
        for _ in range(4):
            shape = rotate_clockwise(shape)
        assert np.array_equal(shape, template), kind
        assert np.array_equal(template, before)
        once = rotate_clockwise(template)
        assert once.shape == template.shape[::-1]


def test_spawn_position_is_centered_and_free():
    grid = GameGrid(10, 20)
    for kind in TetrominoType:
        piece = ActivePiece.from_template(NextPiece(kind), grid.width)
        assert piece.y == 0
        assert piece.color == NextPiece(kind).color == color_for(kind)
        assert piece.x == 5 - piece.shape.shape[1] // 2
        assert not grid.collides(piece.shape, piece.x, piece.y)
        for x, y in piece.cells():
            assert not grid.is_occupied(x, y)


def test_rotation_in_open_space_keeps_anchor():
    grid = GameGrid(10, 20)
    piece = ActivePiece.from_template(NextPiece(TetrominoType.T), grid.width)
    piece.y = 5
    rotated = resolve_rotation(grid, piece)
    assert rotated is not None
    assert (rotated.x, rotated.y) == (piece.x, 5)
    assert rotated.shape.tolist() == [[1, 0], [1, 1], [1, 0]]
    # The original piece is untouched
    assert piece.shape.tolist() == [[0, 1, 0], [1, 1, 1]]


def test_wall_kick_left_at_right_wall():
    grid = GameGrid(10, 20)
    piece = ActivePiece(TetrominoType.T, np.array([[1, 0], [1, 1], [1, 0]], dtype=np.int8), x=8, y=5)
    rotated = resolve_rotation(grid, piece)
    assert rotated is not None
    assert (rotated.x, rotated.y) == (7, 5)
    assert rotated.shape.tolist() == [[1, 1, 1], [0, 1, 0]]


def test_wall_kick_right_when_left_is_blocked():
    grid = GameGrid(10, 20)
    piece = ActivePiece(TetrominoType.I, BASE_SHAPES[TetrominoType.I], x=3, y=5)
    # Vertical I at columns 3 and 2 would hit these
    grid.grid[7, 3] = 1
    grid.grid[7, 2] = 1
    rotated = resolve_rotation(grid, piece)
    assert rotated is not None
    assert (rotated.x, rotated.y) == (4, 5)
    assert rotated.shape.shape == (4, 1)


def test_wall_kick_up_at_floor():
    grid = GameGrid(10, 20)
    piece = ActivePiece(TetrominoType.T, BASE_SHAPES[TetrominoType.T], x=4, y=18)
    rotated = resolve_rotation(grid, piece)
    assert rotated is not None
    assert (rotated.x, rotated.y) == (4, 17)


def test_rotation_rejected_when_every_kick_collides():
    grid = GameGrid(10, 20)
    piece = ActivePiece(TetrominoType.I, BASE_SHAPES[TetrominoType.I], x=3, y=19)
    assert resolve_rotation(grid, piece) is None
