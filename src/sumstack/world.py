import random

from esper import World

from sumstack.components.session import Session


def create_world(*, rng: random.Random | None = None) -> World:
    """Create the ECS world holding the singleton ``Session`` entity."""
    world = World()
    setattr(world, "random", rng or random.Random())
    world.create_entity(Session())
    return world
