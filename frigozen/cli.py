"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .app import FrigozenApp
from .config import load_config
from .errors import InvalidDateError
from .i18n import LANGUAGES, category_label, label
from .models import FoodCategory, FoodItem
from .state import THEMES, View
from .views import expiry_status


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="frigozen",
        description="Frigozen : suivez votre frigo, évitez le gaspillage",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="chemin du fichier de configuration (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="journalisation détaillée"
    )

    sub = parser.add_subparsers(dest="command")

    login_parser = sub.add_parser("login", help="se connecter")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.add_argument("--name", default=None)

    sub.add_parser("logout", help="se déconnecter")

    dash_parser = sub.add_parser("dashboard", help="tableau de bord")
    dash_parser.add_argument("--json", action="store_true", help="sortie JSON")

    fridge_parser = sub.add_parser("fridge", help="contenu du frigo")
    fridge_parser.add_argument(
        "--all", action="store_true", help="inclure les produits consommés"
    )
    fridge_parser.add_argument("--json", action="store_true", help="sortie JSON")

    scan_parser = sub.add_parser("scan", help="scanner un ticket de caisse")
    scan_parser.add_argument(
        "--image", type=str, default=None, help="photo existante du ticket"
    )
    scan_parser.add_argument("--json", action="store_true", help="sortie JSON")

    add_parser = sub.add_parser("add", help="ajouter un produit à la main")
    add_parser.add_argument("name")
    add_parser.add_argument("--expiry", required=True, help="date AAAA-MM-JJ")
    add_parser.add_argument("--qty", type=int, default=1)
    add_parser.add_argument(
        "--category",
        choices=[c.value for c in FoodCategory],
        default=FoodCategory.OTHER.value,
    )

    use_parser = sub.add_parser("use", help="marquer un produit comme consommé")
    use_parser.add_argument("id")
    use_parser.add_argument(
        "--one", action="store_true", help="ne consommer qu'une unité"
    )

    date_parser = sub.add_parser("set-expiry", help="corriger une date de péremption")
    date_parser.add_argument("id")
    date_parser.add_argument("date")

    clear_parser = sub.add_parser("clear", help="vider le frigo")
    clear_parser.add_argument("--yes", action="store_true", help="ne pas demander")

    recipes_parser = sub.add_parser("recipes", help="suggérer des recettes")
    recipes_parser.add_argument("--json", action="store_true", help="sortie JSON")

    settings_parser = sub.add_parser("settings", help="réglages")
    settings_parser.add_argument("--lang", choices=LANGUAGES, default=None)
    mode = settings_parser.add_mutually_exclusive_group()
    mode.add_argument("--dark", action="store_true", default=None)
    mode.add_argument("--light", action="store_true", default=None)
    settings_parser.add_argument("--theme", choices=list(THEMES), default=None)

    remind_parser = sub.add_parser("remind", help="rappels de péremption")
    remind_parser.add_argument(
        "--now", action="store_true", help="vérifier une seule fois et quitter"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    load_dotenv()

    config = load_config(args.config)

    if args.command == "remind":
        _cmd_remind(config, args)
        return

    app = FrigozenApp(config)
    try:
        if args.command != "login" and not app.state.logged_in:
            print("Veuillez d'abord vous connecter : frigozen login", file=sys.stderr)
            sys.exit(1)

        match args.command:
            case "login":
                _cmd_login(app, args)
            case "logout":
                app.state.logout()
                print("Déconnecté.")
            case "dashboard":
                _cmd_dashboard(app, args)
            case "fridge":
                _cmd_fridge(app, args)
            case "scan":
                asyncio.run(_cmd_scan(app, config, args))
            case "add":
                _cmd_add(app, args)
            case "use":
                _cmd_use(app, args)
            case "set-expiry":
                _cmd_set_expiry(app, args)
            case "clear":
                _cmd_clear(app, args)
            case "recipes":
                asyncio.run(_cmd_recipes(app, args))
            case "settings":
                asyncio.run(_cmd_settings(app, args))
    finally:
        app.close()


def _format_item(item: FoodItem, language: str) -> str:
    status, days = expiry_status(item)
    state = label(language, "used") if item.is_used else label(language, status, days=days)
    count = f"{item.current_quantity} x " if item.current_quantity > 0 else ""
    return (
        f"  {item.id}  {item.name:<20} {count}{item.quantity} • "
        f"{category_label(language, item.category)}  [{state}]"
    )


def _cmd_login(app: FrigozenApp, args) -> None:
    try:
        user = app.state.login(args.email, args.password, args.name)
    except ValueError as e:
        print(f"Connexion impossible : {e}", file=sys.stderr)
        sys.exit(1)
    print(label(app.state.language, "welcome", name=user.name))


def _cmd_dashboard(app: FrigozenApp, args) -> None:
    summary = app.dashboard()
    lang = app.state.language

    if args.json:
        data = {
            "active": summary.active_count,
            "total": summary.total_count,
            "consumed": summary.consumed_count,
            "consumptionPercentage": summary.consumption_percentage,
            "expiringSoon": [i.to_dict() for i in summary.expiring_soon],
        }
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    user = app.state.user
    print(label(lang, "welcome", name=(user.name if user else "") or "Chef"))
    print(label(lang, "subtitle", count=summary.active_count))
    print()
    if summary.expiring_soon:
        print(f"⏰ {label(lang, 'expiring_title')}")
        for item in summary.expiring_soon[:4]:
            print(_format_item(item, lang))
        print()
    print(f"  {label(lang, 'stat_consumed')}: {summary.consumption_percentage}%")
    print(f"  {label(lang, 'stat_avoided')}: {summary.consumed_count}")


def _cmd_fridge(app: FrigozenApp, args) -> None:
    app.state.view = View.FRIDGE
    items = list(app.store) if args.all else app.active_items()
    lang = app.state.language

    if args.json:
        print(json.dumps([i.to_dict() for i in items], ensure_ascii=False, indent=2))
        return
    if not items:
        print(label(lang, "empty_fridge"))
        return
    for item in items:
        print(_format_item(item, lang))


async def _cmd_scan(app: FrigozenApp, config, args) -> None:
    if args.image:
        image_path = args.image
    else:
        from .camera import ReceiptCamera

        camera = ReceiptCamera(config.camera.index, config.camera.save_dir)
        print("📷 Prise de la photo...")
        try:
            image_path = camera.capture().image_path
        except (ImportError, RuntimeError) as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)

    print("🔍 Analyse du ticket...")
    added = await app.scan_receipt(image_path)

    if args.json:
        print(json.dumps([i.to_dict() for i in added], ensure_ascii=False, indent=2))
        return
    if not added:
        print("Aucun produit détecté.")
        return
    print(f"🥬 {len(added)} produit(s) ajouté(s) :")
    for item in added:
        print(_format_item(item, app.state.language))


def _cmd_add(app: FrigozenApp, args) -> None:
    try:
        item = app.add_manual(args.name, args.expiry, args.qty, args.category)
    except ValueError as e:
        print(f"Ajout impossible : {e}", file=sys.stderr)
        sys.exit(1)
    print(_format_item(item, app.state.language))


def _cmd_use(app: FrigozenApp, args) -> None:
    item = app.mark_used(args.id, consume_all=not args.one)
    if item is None:
        print(f"Produit introuvable : {args.id}", file=sys.stderr)
        return
    print(_format_item(item, app.state.language))


def _cmd_set_expiry(app: FrigozenApp, args) -> None:
    try:
        item = app.update_expiry(args.id, args.date)
    except InvalidDateError:
        print(f"Date invalide : {args.date!r} (date inchangée)", file=sys.stderr)
        sys.exit(1)
    if item is None:
        print(f"Produit introuvable : {args.id}", file=sys.stderr)
        return
    print(_format_item(item, app.state.language))


def _cmd_clear(app: FrigozenApp, args) -> None:
    if not args.yes:
        answer = input("Vider le frigo ? Cette action est définitive [o/N] ")
        if answer.strip().lower() not in ("o", "oui", "y", "yes"):
            print("Annulé.")
            return
    app.clear_fridge()
    print("Frigo vidé.")


async def _cmd_recipes(app: FrigozenApp, args) -> None:
    if not app.active_items():
        print(label(app.state.language, "empty_fridge"))
        return

    print("🍳 Recherche de recettes...")
    recipes = await app.generate_recipes()

    if args.json:
        print(json.dumps([r.to_dict() for r in recipes], ensure_ascii=False, indent=2))
        return
    if not recipes:
        print("Aucune recette trouvée. Ajoutez des produits !")
        return
    for recipe in recipes:
        print(f"{'─' * 50}")
        print(f"🍽  {recipe.title}  ({recipe.prep_time} · {recipe.difficulty})")
        if recipe.description:
            print(f"   « {recipe.description} »")
        print()
        for ing in recipe.ingredients:
            print(f"   • {ing}")
        print()
        for i, step in enumerate(recipe.instructions, 1):
            print(f"   {i}. {step}")
        image = recipe.image_url or ""
        print(f"   🖼  {'(image générée)' if image.startswith('data:') else image}")
        print()


async def _cmd_settings(app: FrigozenApp, args) -> None:
    if args.theme:
        app.state.set_theme(args.theme)
    if args.dark:
        app.state.set_dark_mode(True)
    elif args.light:
        app.state.set_dark_mode(False)
    if args.lang:
        renamed = await app.change_language(args.lang)
        if renamed:
            print(f"🌐 {renamed} produit(s) traduit(s).")

    state = app.state
    user = state.user
    if user:
        print(f"  {user.name} <{user.email}>")
    print(f"  langue : {state.language}")
    print(f"  mode sombre : {'oui' if state.dark_mode else 'non'}")
    print(f"  thème : {state.theme}")


def _cmd_remind(config, args) -> None:
    from .scheduler import ExpiryReminderScheduler

    try:
        scheduler = ExpiryReminderScheduler(config)
    except ImportError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    if args.now:
        soon = scheduler.check_now()
        print(f"{len(soon)} produit(s) à consommer vite.")
        return

    if not config.reminders.enabled:
        print("Rappels désactivés ([reminders] enabled = true pour les activer).")
        return

    async def _run() -> None:
        scheduler.start()
        try:
            await asyncio.Event().wait()
        finally:
            scheduler.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
