import random

import pytest

from bakerysim.chef import ChefTeam, chef_step, parse_chef_team, run_chef
from bakerysim.common import Bakery, FinalProduct, Ingredient, ReadyProduct
from bakerysim.config import Config


def _config():
    return Config(
        max_paste=4,
        max_raw_bread=4,
        max_raw_cake=4,
        max_raw_sweet=4,
        max_raw_sweet_patisserie=4,
        max_raw_savory_patisserie=4,
        max_sandwich=4,
    )


def _stocked_bakery(amount):
    bakery = Bakery()
    bakery.ingredients = {i: amount for i in Ingredient}
    bakery.paste = amount
    bakery.bread = amount
    return bakery


@pytest.mark.parametrize(
    "name, team",
    [
        ("paste", ChefTeam.PASTE),
        ("rawbread", ChefTeam.RAW_BREAD),
        ("cake", ChefTeam.CAKE),
        ("sweet", ChefTeam.SWEET),
        ("sweetp", ChefTeam.SWEET_PATISSERIE),
        ("savoryp", ChefTeam.SAVORY_PATISSERIE),
        ("sandwich", ChefTeam.SANDWICH),
    ],
)
def test_parse_chef_team(name, team):
    assert parse_chef_team(name) is team


def test_unknown_team_falls_back_to_paste():
    assert parse_chef_team("pizza") is ChefTeam.PASTE


def test_paste_team_uses_dough_ingredients():
    bakery = _stocked_bakery(1)
    bakery.paste = 0
    assert chef_step(bakery, _config(), ChefTeam.PASTE) is True
    assert bakery.paste == 1
    for ingredient in (Ingredient.WHEAT, Ingredient.YEAST, Ingredient.MILK):
        assert bakery.ingredients[ingredient] == 0
    assert bakery.ingredients[Ingredient.BUTTER] == 1


def test_paste_limit_consumes_ingredients_but_keeps_stock():
    config = _config()
    bakery = _stocked_bakery(1)
    bakery.paste = config.max_paste
    assert chef_step(bakery, config, ChefTeam.PASTE) is True
    assert bakery.paste == config.max_paste
    assert bakery.ingredients[Ingredient.WHEAT] == 0


def test_missing_ingredient_changes_nothing():
    bakery = _stocked_bakery(1)
    bakery.ingredients[Ingredient.BUTTER] = 0
    before = dict(bakery.ingredients)
    assert chef_step(bakery, _config(), ChefTeam.CAKE) is False
    assert bakery.ingredients == before
    assert bakery.ready[ReadyProduct.RAW_CAKE] == 0


@pytest.mark.parametrize(
    "team, product, used",
    [
        (ChefTeam.RAW_BREAD, ReadyProduct.RAW_BREAD,
         {Ingredient.WHEAT, Ingredient.YEAST, Ingredient.MILK}),
        (ChefTeam.CAKE, ReadyProduct.RAW_CAKE,
         {Ingredient.WHEAT, Ingredient.BUTTER, Ingredient.MILK, Ingredient.SUGAR_SALT}),
        (ChefTeam.SWEET, ReadyProduct.RAW_SWEET,
         {Ingredient.SWEET_ITEMS, Ingredient.SUGAR_SALT}),
    ],
)
def test_ready_product_recipes(team, product, used):
    bakery = _stocked_bakery(2)
    assert chef_step(bakery, _config(), team) is True
    assert bakery.ready[product] == 1
    for ingredient in Ingredient:
        expected = 1 if ingredient in used else 2
        assert bakery.ingredients[ingredient] == expected
    assert bakery.paste == 2


def test_sweet_patisserie_uses_paste_and_sweet_items():
    bakery = _stocked_bakery(1)
    assert chef_step(bakery, _config(), ChefTeam.SWEET_PATISSERIE) is True
    assert bakery.paste == 0
    assert bakery.ingredients[Ingredient.SWEET_ITEMS] == 0
    assert bakery.ready[ReadyProduct.RAW_SWEET_PATISSERIE] == 1


def test_savory_patisserie_needs_paste():
    bakery = _stocked_bakery(1)
    bakery.paste = 0
    assert chef_step(bakery, _config(), ChefTeam.SAVORY_PATISSERIE) is False
    assert bakery.ingredients[Ingredient.CHEESE] == 1
    assert bakery.ready[ReadyProduct.RAW_SAVORY_PATISSERIE] == 0


def test_sandwich_uses_bread_cheese_and_salami():
    bakery = _stocked_bakery(1)
    assert chef_step(bakery, _config(), ChefTeam.SANDWICH) is True
    assert bakery.bread == 0
    assert bakery.ingredients[Ingredient.CHEESE] == 0
    assert bakery.ingredients[Ingredient.SALAMI] == 0
    assert bakery.final[FinalProduct.SANDWICH] == 1


def test_sandwich_without_bread_fails():
    bakery = _stocked_bakery(1)
    bakery.bread = 0
    assert chef_step(bakery, _config(), ChefTeam.SANDWICH) is False
    assert bakery.final[FinalProduct.SANDWICH] == 0


def test_run_chef_rests_between_steps_until_shutdown():
    bakery = _stocked_bakery(10)
    sleeps = []

    def fake_sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 4:
            bakery.request_shutdown()

    run_chef(bakery, _config(), ChefTeam.SWEET, random.Random(5), fake_sleep)
    assert len(sleeps) == 4
    assert all(2 <= s <= 5 for s in sleeps)
    assert bakery.ready[ReadyProduct.RAW_SWEET] == len(sleeps)


def test_run_chef_exits_immediately_after_shutdown():
    bakery = _stocked_bakery(3)
    bakery.request_shutdown()
    sleeps = []
    run_chef(bakery, _config(), ChefTeam.PASTE, random.Random(5), sleeps.append)
    assert sleeps == []
    assert bakery.paste == 3