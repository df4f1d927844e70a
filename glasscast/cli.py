"""CLI entry point: a minimal host for the weather and favorites core."""

import argparse
import asyncio
import logging

from glasscast.config.loader import get_config_value, load_config, set_config_value
from glasscast.config.schema import AppConfig, FavoritesMode
from glasscast.container import AppContainer
from glasscast.ingest.errors import TransportError

DEFAULT_CONFIG = "glasscast.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="glasscast",
        description="Minimal weather app core",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log at DEBUG level"
    )

    sub = parser.add_subparsers(dest="command")

    # weather
    weather_p = sub.add_parser("weather", help="Load current conditions and forecast")
    weather_p.add_argument("--city", help="City to load (default from config)")

    # favorites list / toggle / clear
    fav_p = sub.add_parser("favorites", help="Favorite cities")
    fav_p.add_argument(
        "--live", action="store_true", help="Use the remote favorites service"
    )
    fav_sub = fav_p.add_subparsers(dest="favorites_command")
    fav_sub.add_parser("list", help="Show favorites")
    toggle_p = fav_sub.add_parser("toggle", help="Add or remove a favorite")
    toggle_p.add_argument("city")
    fav_sub.add_parser("clear", help="Remove every favorite")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "weather":
        return asyncio.run(_cmd_weather(config, args))
    elif args.command == "favorites":
        return _cmd_favorites(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


async def _cmd_weather(config: AppConfig, args) -> int:
    container = AppContainer.from_config(config)
    coordinator = container.make_coordinator(args.city)
    try:
        await coordinator.load()
    finally:
        await coordinator.close()
        await container.aclose()

    if coordinator.error_message is not None:
        print(f"Error: {coordinator.error_message}")
        return 1
    current = coordinator.current
    if current is None:
        print("No weather loaded")
        return 1
    print(f"{current.city}: {current.temperature}° {current.condition} ({current.theme})")
    print(f"  H:{current.high}° L:{current.low}°")
    for day in coordinator.forecast:
        print(f"  {day.weekday:<4} {day.low:>3}° / {day.high:>3}°  {day.symbol_name}")
    return 0


def _cmd_favorites(config: AppConfig, args) -> int:
    if args.live:
        config = config.model_copy(
            update={"favorites": config.favorites.model_copy(
                update={"mode": FavoritesMode.LIVE}
            )}
        )
    if args.favorites_command not in ("list", "toggle", "clear"):
        print("Use: favorites list | favorites toggle CITY | favorites clear")
        return 1
    try:
        return asyncio.run(_run_favorites(config, args))
    except TransportError as e:
        # Raised before any request, e.g. live mode without an API key.
        print(f"Error: {e}")
        return 1


async def _run_favorites(config: AppConfig, args) -> int:
    container = AppContainer.from_config(config)
    store = container.favorites_store
    try:
        await store.load()
        if args.favorites_command == "toggle":
            await store.toggle(args.city)
        elif args.favorites_command == "clear":
            await store.clear_all()
    finally:
        await container.aclose()

    if store.error_message:
        print(f"Error: {store.error_message}")
    if not store.favorites:
        print("No favorites yet")
    for favorite in store.favorites:
        print(f"  * {favorite.city}")
    return 1 if store.error_message else 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
