"""Entry point: ``python -m src``.

  - ``python -m src cli``        → Headless demo: walk a small world, then fight one battle
"""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.core.world import World

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Idle RPG action-resolution engine")
    sub = parser.add_subparsers(dest="command")

    cli = sub.add_parser("cli", help="Run the headless demo simulation")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--rounds", type=int, default=50)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def build_demo_world() -> World:
    """Two maps joined by a staircase, with a trainer and a collectible."""
    from src.core.enums import Gender, MovementType, TileObjectType
    from src.core.models import Actor, Party
    from src.core.tiles import GameMap, TeleportLocation, TileObject
    from src.core.world import World

    town_rows = [
        "############",
        "#..........#",
        "#..,,,,....#",
        "#..,__,....#",
        "#..,,,,..~~#",
        "#........~~#",
        "#..........#",
        "############",
    ]
    town_objects = {
        (4, 3): TileObject(TileObjectType.TRAINER.value, "Mage", {"realName": "Merlin"}),
        (9, 1): TileObject(TileObjectType.COLLECTIBLE.value, "Lucky Clover", {
            "rarity": "rare",
            "flavorText": "Four leaves, one of them slightly chewed.",
            "storyline": "Norkos",
        }),
        (10, 6): TileObject(TileObjectType.TELEPORT.value, "Stairs Down", {
            "map": "Norkos Dungeon",
            "destx": "2",
            "desty": "2",
            "movementType": MovementType.DESCEND.value,
        }),
        (1, 6): TileObject("", "Fountain", {"forceEvent": "Restoration"}),
    }
    town_regions = {(x, y): "Norkos Square" for x in range(3, 7) for y in range(2, 5)}
    town = GameMap.from_rows("Norkos", town_rows, town_objects, town_regions, default_region="Norkos Fields")

    dungeon_rows = [
        "##########",
        "#________#",
        "#________#",
        "#___##___#",
        "#________#",
        "##########",
    ]
    dungeon_objects = {
        (8, 4): TileObject(TileObjectType.TELEPORT.value, "Stairs Up", {
            "toLoc": "norkos-stairs",
            "movementType": MovementType.ASCEND.value,
        }),
        (5, 1): TileObject("", "Sealed Door", {"requireCollectible": "Lucky Clover"}),
    }
    dungeon = GameMap.from_rows("Norkos Dungeon", dungeon_rows, dungeon_objects, default_region="Dungeon Halls")

    world = World(
        maps=[town, dungeon],
        locations=[TeleportLocation("norkos-stairs", "Norkos", 9, 6, "Norkos Town")],
    )

    hero = Actor(world.allocate_actor_id(), "Aria", level=12, profession_name="Mage", gender=Gender.FEMALE,
                 abilities=["attack", "meditate", "fireball"], map="Norkos", x=2, y=2)
    squire = Actor(world.allocate_actor_id(), "Bram", level=6, profession_name="Fighter",
                   abilities=["attack", "rend"], combat_effects=["prone"], map="Norkos", x=2, y=3)
    wanderer = Actor(world.allocate_actor_id(), "Tipsy", level=3, map="Norkos", x=6, y=5)
    wanderer.personalities.activate("Drunk")
    for actor in (hero, squire, wanderer):
        world.add_actor(actor)
    Party("Dawnseekers", [hero, squire])
    return world


def _run_cli(args: argparse.Namespace) -> None:
    from src.battle.battle import Battle
    from src.config import SimulationConfig
    from src.core.models import Actor
    from src.engine.emitter import PLAYER_COLLECTIBLE, PLAYER_TRANSFER, emitter
    from src.engine.world_loop import WorldLoop
    from src.movement.dispatcher import TileDispatcher
    from src.systems.rng import DeterministicRNG
    from src.utils.event_log import EventLog
    from src.utils.logging import setup_logging
    from src.utils.narration import Narrator

    config = SimulationConfig(
        world_seed=args.seed,
        max_ticks=args.ticks,
        max_battle_rounds=args.rounds,
        log_level=args.log_level,
    )

    setup_logging(config.log_level)

    rng = DeterministicRNG(config.world_seed)
    world = build_demo_world()
    event_log = EventLog()
    narrator = Narrator(event_log, clock=lambda: world.tick)

    def _on_transfer(payload: dict[str, Any]) -> None:
        dest = payload["dest"]
        logger.info("%s went from %s to %s", payload["actor"].name, dest["fromName"], dest["destName"])

    def _on_collectible(payload: dict[str, Any]) -> None:
        logger.info("%s found %s", payload["actor"].name, payload["collectible"].name)

    emitter.on(PLAYER_TRANSFER, _on_transfer)
    emitter.on(PLAYER_COLLECTIBLE, _on_collectible)

    dispatcher = TileDispatcher(config, world, narrator, emitter)
    loop = WorldLoop(config, world, rng, dispatcher)
    loop.run()

    for actor in world.actors.values():
        steps = actor.statistics.get_stat("Character.Steps") if actor.statistics else 0
        logger.info("%s (%s) ended at %s %s in %s after %d steps; collectibles: %s",
                    actor.name, actor.profession_name, actor.map, actor.pos, actor.map_region or "-",
                    steps, ", ".join(actor.collectibles.names()) or "none")

    heroes = [a for a in world.actors.values() if a.party is not None]
    goblins = [
        Actor(world.allocate_actor_id(), f"Goblin {n}", level=4, statistics=None,
              stats={"str": 8, "int": 2, "con": 8, "dex": 6, "agi": 6, "luk": 3})
        for n in (1, 2)
    ]
    battle = Battle(config, rng, [heroes, goblins], narrator, name="Ambush at Norkos")
    winners = battle.run()
    battle.disband()

    for event in event_log.by_category("battle")[-5:]:
        logger.info("  %s", event.message)
    logger.info("Battle winners: %s", ", ".join(a.name for a in winners) if winners else "none")
    logger.info("Done. %d narration lines recorded.", len(event_log))

    emitter.off(PLAYER_TRANSFER, _on_transfer)
    emitter.off(PLAYER_COLLECTIBLE, _on_collectible)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "cli":
        _run_cli(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
