from block_stack.game import Action, BlockStackGame, GameConfig, GameState, GravityScheduler

from tests.helpers import started_game


def test_gravity_fires_once_per_interval():
    game = started_game()
    scheduler = GravityScheduler(game, now_ms=0)
    y = game.current_piece.y
    assert not scheduler.tick(500)
    assert not scheduler.tick(999)
    assert scheduler.tick(1000)
    assert game.current_piece.y == y + 1
    # A long stall still moves only one row
    assert scheduler.tick(5000)
    assert game.current_piece.y == y + 2
    assert not scheduler.tick(5999)
    assert scheduler.tick(6000)


def test_clock_rebases_when_game_starts():
    game = BlockStackGame(GameConfig(random_seed=0))
    scheduler = GravityScheduler(game, now_ms=0)
    assert not scheduler.tick(100)
    game.start()
    assert not scheduler.tick(3000)
    assert not scheduler.tick(3999)
    assert scheduler.tick(4000)


def test_paused_game_gets_no_gravity():
    game = started_game()
    scheduler = GravityScheduler(game, now_ms=0)
    game.step(Action.PAUSE)
    y = game.current_piece.y
    assert not scheduler.tick(2000)
    assert not scheduler.tick(9000)
    assert game.current_piece.y == y
    game.step(Action.PAUSE)
    assert not scheduler.tick(9500)
    assert scheduler.tick(10000)
    assert game.current_piece.y == y + 1


def test_pause_toggle_between_ticks_keeps_timing():
    game = started_game()
    scheduler = GravityScheduler(game, now_ms=0)
    game.step(Action.PAUSE)
    game.step(Action.PAUSE)
    assert game.state is GameState.RUNNING
    assert scheduler.tick(1000)


def test_interval_shrinks_with_score():
    game = started_game()
    scheduler = GravityScheduler(game, now_ms=0)
    game.session.drop_interval = 200
    assert scheduler.tick(200)
    assert scheduler.tick(400)


def test_idle_and_game_over_are_noops():
    game = started_game()
    scheduler = GravityScheduler(game, now_ms=0)
    game.grid.grid[0:2, 2:8] = 1
    game.spawn()
    assert game.game_over
    assert not scheduler.tick(10000)
    game.reset()
    assert not scheduler.tick(20000)


def test_tick_redraws_every_frame():
    class Counter:
        calls = 0

        def render(self, snapshot):
            self.calls += 1

    counter = Counter()
    game = started_game(renderer=counter)
    scheduler = GravityScheduler(game, now_ms=0)
    before = counter.calls
    scheduler.tick(10)
    scheduler.tick(20)
    assert counter.calls == before + 2


def test_restart_rebases_clock():
    game = started_game()
    scheduler = GravityScheduler(game, now_ms=0)
    scheduler.restart(50000)
    assert not scheduler.tick(50500)
    assert scheduler.tick(51000)


def test_restart_between_ticks_gives_new_piece_full_interval():
    game = started_game()
    scheduler = GravityScheduler(game, now_ms=0)
    assert not scheduler.tick(900)
    game.reset()
    game.start()
    y = game.current_piece.y
    assert not scheduler.tick(1000)
    assert game.current_piece.y == y
    assert not scheduler.tick(1999)
    assert scheduler.tick(2000)
    assert game.current_piece.y == y + 1
