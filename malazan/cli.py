"""CLI entry point for the Malazan companion."""

import argparse
import logging
import sys

from malazan.browse import ALL, browse_factions, browse_timeline, unique_values
from malazan.config import DuelConfig, load_config
from malazan.content import ContentLibrary, validate_content
from malazan.db import ReadingStore
from malazan.games.duel import random_fighters, simulate_duel
from malazan.games.fate import draw_cards, interpret, new_reading, save_reading, share_text
from malazan.games.quiz import QuizSession
from malazan.games.quotes import QuoteMatchSession, score_message


def _parse_answers(raw: str | None) -> list[int] | None:
    """Parse "1,3,2" (1-based, as shown on screen) into 0-based indices."""
    if raw is None:
        return None
    try:
        return [int(a) - 1 for a in raw.split(",") if a.strip()]
    except ValueError:
        raise ValueError(f"Answers must be comma-separated numbers, got: {raw}") from None


def _ask(prompt: str, n_options: int) -> int:
    while True:
        choice = input(f"{prompt} [1-{n_options}]: ").strip()
        if choice.isdigit() and 1 <= int(choice) <= n_options:
            return int(choice) - 1
        print(f"  Please enter a number between 1 and {n_options}.")


def _cmd_quiz(args: argparse.Namespace, library: ContentLibrary) -> None:
    session = QuizSession(library.questions, library.characters)
    if not session.questions:
        print("No quiz questions available.")
        return
    scripted = _parse_answers(args.answers)
    if scripted is not None:
        for idx in scripted:
            session.answer(idx)
    while not session.is_completed:
        q = session.current_question
        number, total = session.progress
        print(f"\nQuestion {number} of {total}: {q.question}")
        for i, option in enumerate(q.options, 1):
            print(f"  {i}. {option.text}")
        session.answer(_ask("Your answer", len(q.options)))

    result = session.result()
    if not result.characters:
        print("\nThe quiz could not determine a character.")
        return
    label = "You are" if len(result.characters) == 1 else "You are a blend of"
    print(f"\n{label}: {', '.join(c.name for c in result.characters)}")
    for c in result.characters:
        print(f"  {c.name}: {c.description}")
        if c.traits:
            print(f"    traits: {', '.join(c.traits)}")


def _cmd_draw(args: argparse.Namespace, library: ContentLibrary, store: ReadingStore, limit: int) -> None:
    reading = new_reading(draw_cards(library.deck))
    interpreted = interpret(reading)
    for slot in interpreted["cards"]:
        card = slot["card"]
        print(f"\n{slot['position']}: {card['icon']} {card['name']} ({card['domain']}, aspect of {card['aspect']})")
        print(f"  {slot['prophecy']}")
    print(f"\n{interpreted['summary']}")
    if args.share:
        print("\n" + share_text(reading.cards))
    if args.save:
        saved = save_reading(store, reading, limit)
        print(f"\nReading saved ({len(saved)} in history).")


def _cmd_history(args: argparse.Namespace, store: ReadingStore) -> None:
    if args.clear:
        store.clear()
        print("Reading history cleared.")
        return
    readings = store.list_readings()
    if not readings:
        print("No saved readings.")
        return
    for r in readings:
        past, present, future = r.cards
        print(f"  {r.timestamp}  Past: {past.name} | Present: {present.name} | Future: {future.name}")


def _cmd_quotes(args: argparse.Namespace, library: ContentLibrary) -> None:
    session = QuoteMatchSession.shuffled(library.quotes)
    if not session.quotes:
        print("No quotes available.")
        return
    scripted = _parse_answers(args.answers)
    while not session.is_completed:
        q = session.current_quote
        print(f'\nQuote {session.current_index + 1} of {len(session.quotes)}: "{q.quote}"')
        print("Who said this?")
        for i, option in enumerate(q.options, 1):
            print(f"  {i}. {option.text}")
        if scripted:
            idx = scripted.pop(0)
        else:
            idx = _ask("Your answer", len(q.options))
        answer = session.answer(idx)
        if answer.is_correct:
            print("  Correct!")
        else:
            print(f"  Wrong. It was {answer.correct_text}.")

    print(
        f"\n{session.correct_count}/{len(session.answers)} correct "
        f"({session.accuracy}%). {score_message(session.accuracy)}"
    )


def _cmd_factions(args: argparse.Namespace, library: ContentLibrary) -> None:
    if args.list_values:
        print(f"Statuses: {', '.join(unique_values(library.factions, 'status'))}")
        print(f"Types: {', '.join(unique_values(library.factions, 'type'))}")
        return
    groups = browse_factions(
        library.factions,
        search=args.search,
        status=args.status,
        type=args.type,
        group_by_origin=args.group_by_origin,
    )
    total = sum(len(g) for g in groups.values())
    suffix = f' matching "{args.search}"' if args.search else ""
    print(f"Showing {total} faction{'s' if total != 1 else ''}{suffix}")
    if total == 0:
        print("No factions found. Try adjusting your search terms or filters.")
        return
    for label, factions in groups.items():
        if args.group_by_origin:
            print(f"\n{label}")
        for f in factions:
            print(f"  {f.icon} {f.name} [{f.type}, {f.status}]")
            if args.verbose:
                print(f"    {f.description}")
                if f.affiliations:
                    print(f"    allies: {', '.join(f.affiliations)}")
                if f.enemies:
                    print(f"    enemies: {', '.join(f.enemies)}")


def _cmd_timeline(args: argparse.Namespace, library: ContentLibrary, book_order: list[str]) -> None:
    if args.list_values:
        print(f"Books: {', '.join(unique_values(library.timeline, 'book'))}")
        print(f"Locations: {', '.join(unique_values(library.timeline, 'location'))}")
        return
    events = browse_timeline(
        library.timeline,
        search=args.search,
        book=args.book,
        location=args.location,
        order=args.order,
        book_order=book_order,
    )
    print(f"{len(events)} events")
    for e in events:
        print(f"  {e.year:>6}  {e.title}  ({e.book}; {e.location})")
        if args.verbose:
            print(f"          {e.description}")
            if e.characters:
                print(f"          with {', '.join(e.characters)}")


def _cmd_duel(args: argparse.Namespace, library: ContentLibrary, duel_config: DuelConfig) -> None:
    if args.random or not args.fighters:
        fighter1, fighter2 = random_fighters(library.characters)
    elif len(args.fighters) != 2:
        raise ValueError("Give exactly two fighters (id or name), or use --random")
    else:
        fighter1, fighter2 = (library.find_character(f) for f in args.fighters)

    print(f"{fighter1.name} ({fighter1.warren or 'no warren'}) vs {fighter2.name} ({fighter2.warren or 'no warren'})")
    result = simulate_duel(fighter1, fighter2, duel_config)
    print(f"\nWinner: {result.winner.name} ({result.winner_score} to {result.loser_score}, {result.margin.value})")
    print(result.battle_description)


def main() -> None:
    parser = argparse.ArgumentParser(description="Malazan Companion")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # quiz command
    quiz_parser = sub.add_parser("quiz", help="Which character are you?")
    quiz_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    quiz_parser.add_argument(
        "--answers", type=str, default=None,
        help="Comma-separated option numbers (1-based) to answer without prompting",
    )

    # draw command
    draw_parser = sub.add_parser("draw", help="Draw a Deck of Fate reading")
    draw_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    draw_parser.add_argument("--save", action="store_true", help="Save the reading to history")
    draw_parser.add_argument("--share", action="store_true", help="Print a shareable summary")

    # history command
    history_parser = sub.add_parser("history", help="Show saved fate readings")
    history_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    history_parser.add_argument("--clear", action="store_true", help="Delete saved readings")

    # quotes command
    quotes_parser = sub.add_parser("quotes", help="Play the quote matching game")
    quotes_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    quotes_parser.add_argument(
        "--answers", type=str, default=None,
        help="Comma-separated option numbers (1-based) to answer without prompting",
    )

    # factions command
    factions_parser = sub.add_parser("factions", help="Browse factions")
    factions_parser.add_argument("-v", "--verbose", action="store_true", help="Show descriptions")
    factions_parser.add_argument("--search", type=str, default="", help="Search name and description")
    factions_parser.add_argument("--status", type=str, default=ALL, help="Exact status filter")
    factions_parser.add_argument("--type", type=str, default=ALL, help="Exact type filter")
    factions_parser.add_argument("--group-by-origin", action="store_true", help="Group by origin")
    factions_parser.add_argument("--list-values", action="store_true", help="List filter choices")

    # timeline command
    timeline_parser = sub.add_parser("timeline", help="Browse the timeline")
    timeline_parser.add_argument("-v", "--verbose", action="store_true", help="Show descriptions")
    timeline_parser.add_argument("--search", type=str, default="", help="Search title and description")
    timeline_parser.add_argument("--book", type=str, default=ALL, help="Exact book filter")
    timeline_parser.add_argument("--location", type=str, default=ALL, help="Exact location filter")
    timeline_parser.add_argument(
        "--order", choices=["chronological", "book"], default="chronological",
        help="Sort by year or by book publication order",
    )
    timeline_parser.add_argument("--list-values", action="store_true", help="List filter choices")

    # duel command
    duel_parser = sub.add_parser("duel", help="Simulate a duel between two characters")
    duel_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    duel_parser.add_argument("fighters", nargs="*", help="Two character ids or names")
    duel_parser.add_argument("--random", action="store_true", help="Pick two random fighters")

    # validate command
    validate_parser = sub.add_parser("validate", help="Check content files for consistency")
    validate_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config()
    library = ContentLibrary(config)
    store = ReadingStore(config)
    store.init_db()

    try:
        if args.command == "quiz":
            _cmd_quiz(args, library)

        elif args.command == "draw":
            _cmd_draw(args, library, store, config.fate.history_limit)

        elif args.command == "history":
            _cmd_history(args, store)

        elif args.command == "quotes":
            _cmd_quotes(args, library)

        elif args.command == "factions":
            _cmd_factions(args, library)

        elif args.command == "timeline":
            _cmd_timeline(args, library, config.timeline.book_order)

        elif args.command == "duel":
            _cmd_duel(args, library, config.duel)

        elif args.command == "validate":
            report = validate_content(library)
            print(report)
            for problem in report.problems:
                print(f"  - {problem}")
            if not report.ok:
                sys.exit(1)

        else:
            parser.print_help()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    finally:
        store.close()


if __name__ == "__main__":
    main()
