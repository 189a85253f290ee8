"""Factory helpers for creating and removing the menu entities."""
from esper import World

from sumstack.constants import MENU_BUTTON_SPACING
from sumstack.menu.components import MenuAction, MenuButton, MenuTag


def spawn_main_menu(world: World, width: int, height: int) -> None:
    """Create one button per game mode, centred in the window."""
    clear_main_menu(world)
    center_x = width / 2
    center_y = height / 2
    button_specs = (
        ("Classic", MenuAction.CLASSIC, center_y, "A new row rises after every match"),
        ("Time Attack", MenuAction.TIME, center_y - MENU_BUTTON_SPACING, "Rows rise when the clock runs out"),
    )
    for label, action, y_position, hint in button_specs:
        world.create_entity(
            MenuButton(label=label, action=action, x=center_x, y=y_position, hint=hint),
            MenuTag(),
        )


def clear_main_menu(world: World) -> None:
    to_delete = {ent for ent, _ in world.get_component(MenuTag)}
    for ent in to_delete:
        world.delete_entity(ent, immediate=True)
