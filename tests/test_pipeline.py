"""Tests for pipeline module."""
import pytest

from gravitypoop.catalog import define_game
from gravitypoop.definition import GameConfig
from gravitypoop.pipeline import ProductionPipeline
from gravitypoop.state import PlayerState


def test_compute_rate_empty():
    defn = define_game()
    pipeline = ProductionPipeline(defn.config)
    assert pipeline.compute_rate(defn.producers, PlayerState(defn)) == 0.0


def test_compute_rate_sums_owned_producers():
    defn = define_game()
    state = PlayerState(defn)
    state.producers["toilet"].owned_count = 3
    state.producers["cow"].owned_count = 2
    state.producers["portal"].owned_count = 1
    pipeline = ProductionPipeline(defn.config)
    assert pipeline.compute_rate(defn.producers, state) == pytest.approx(0.3 + 2 + 100)


def test_compute_multiplier():
    pipeline = ProductionPipeline(GameConfig())
    assert pipeline.compute_multiplier(1.0, 0) == 1.0
    assert pipeline.compute_multiplier(1.0, 2) == pytest.approx(1.2)
    assert pipeline.compute_multiplier(2.0, 2) == pytest.approx(2.4)


def test_compute_multiplier_custom_rate():
    pipeline = ProductionPipeline(GameConfig(essence_bonus_rate=0.5))
    assert pipeline.compute_multiplier(1.0, 3) == pytest.approx(2.5)


def test_compute_click_value():
    pipeline = ProductionPipeline(GameConfig(click_value=2.0))
    assert pipeline.compute_click_value(1.5) == pytest.approx(3.0)


def test_compute_cost():
    defn = define_game()
    pipeline = ProductionPipeline(defn.config)
    toilet = defn.get_producer("toilet")
    assert pipeline.compute_cost(toilet, 0) == 10
    assert pipeline.compute_cost(toilet, 1) == 11
