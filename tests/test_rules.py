from block_stack.game import ScoringRules


def test_score_delta_table():
    rules = ScoringRules()
    assert rules.score_delta(0, 5) == 0
    assert rules.score_delta(1, 3) == 120
    assert rules.score_delta(2, 1) == 100
    assert rules.score_delta(3, 2) == 600
    assert rules.score_delta(4, 1) == 1200


def test_level_for():
    rules = ScoringRules()
    assert rules.level_for(0) == 1
    assert rules.level_for(9) == 1
    assert rules.level_for(10) == 2
    assert rules.level_for(25) == 3


def test_drop_interval_for():
    rules = ScoringRules()
    assert rules.drop_interval_for(0) == 1000
    assert rules.drop_interval_for(1999) == 1000
    assert rules.drop_interval_for(4000) == 800
    assert rules.drop_interval_for(20000) == 50
    assert rules.drop_interval_for(10 ** 6) == 50
