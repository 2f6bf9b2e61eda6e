import argparse
import json
import logging
import os
import sys

from tqdm import tqdm

from codevault.logging_setup import setup_logging
from codevault.preview import build_preview_document
from codevault.separator import separate
from codevault.snippet import DEFAULT_FOLDER_ID, DEFAULT_TITLE, create_snippet
from codevault.storage import SnippetStore, create_backend


logger = logging.getLogger("codevault")

DEFAULT_STORE = os.getenv("CODEVAULT_STORE_URL", "~/.codevault")


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as file_handle:
        return file_handle.read()


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_separate(args: argparse.Namespace, store: SnippetStore) -> int:
    _print_json(separate(_read_source(args.path)).model_dump())
    return 0


def cmd_preview(args: argparse.Namespace, store: SnippetStore) -> int:
    document = build_preview_document(separate(_read_source(args.path)), dark=args.dark)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as file_handle:
            file_handle.write(document)
        print(f"✅ Preview written to: {args.output}", file=sys.stderr)
    else:
        print(document)
    return 0


def cmd_save(args: argparse.Namespace, store: SnippetStore) -> int:
    if not any(folder.id == args.folder for folder in store.list_folders()):
        print(f"Error: Unknown folder: {args.folder}", file=sys.stderr)
        return 1

    errors: list[str] = []
    saved = 0
    for path in tqdm(args.paths, desc="Saving snippets", unit="file", disable=len(args.paths) < 2):
        try:
            code = separate(_read_source(path))
        except (OSError, UnicodeDecodeError) as exc:
            errors.append(f"{path}: {exc}")
            continue
        if code.is_blank():
            errors.append(f"{path}: no code found")
            continue

        title = args.title or os.path.basename(path) or DEFAULT_TITLE
        snippet = create_snippet(code, title=title, folder_id=args.folder)
        result = store.save_snippet_result(snippet)
        if not result.ok:
            errors.append(f"{path}: {result.error}")
            continue
        saved += 1
        tqdm.write(f"✅ {snippet.title} -> {snippet.id}")

    if errors:
        tqdm.write("\n⚠️  Error Summary:")
        for message in errors[:5]:
            tqdm.write(f"  • {message}")
        if len(errors) > 5:
            remaining = len(errors) - 5
            tqdm.write(f"  ... and {remaining} more")

    logger.debug("Saved %d of %d files", saved, len(args.paths))
    return 0 if saved else 1


def cmd_list(args: argparse.Namespace, store: SnippetStore) -> int:
    if args.query:
        snippets = store.search(args.query)
    else:
        snippets = store.list_snippets_by_folder(args.folder)
    _print_json([snippet.to_record() for snippet in snippets])
    return 0


def cmd_folders(args: argparse.Namespace, store: SnippetStore) -> int:
    _print_json([folder.to_record() for folder in store.list_folders()])
    return 0


def cmd_mkdir(args: argparse.Namespace, store: SnippetStore) -> int:
    name = args.name.strip()
    if not name:
        print("Error: Folder name is required", file=sys.stderr)
        return 1
    folder = store.create_folder(name)
    if folder.is_error:
        print(f"❌ Failed to create folder: {name}", file=sys.stderr)
        return 1
    _print_json(folder.to_record())
    return 0


def cmd_rmdir(args: argparse.Namespace, store: SnippetStore) -> int:
    if args.folder_id == DEFAULT_FOLDER_ID:
        print("Error: Cannot delete the default folder", file=sys.stderr)
        return 1
    result = store.delete_folder_result(args.folder_id)
    if not result.ok:
        print(f"❌ Failed to delete folder {args.folder_id}: {result.error}", file=sys.stderr)
        return 1
    return 0


def cmd_delete(args: argparse.Namespace, store: SnippetStore) -> int:
    result = store.delete_snippet_result(args.snippet_id)
    if not result.ok:
        print(f"❌ Failed to delete snippet {args.snippet_id}: {result.error}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split pasted front-end code into HTML/CSS/JS and file it as snippets"
    )
    parser.add_argument(
        "--store",
        default=DEFAULT_STORE,
        help="Store URL: redis://..., memory://, or a directory path (default: CODEVAULT_STORE_URL or ~/.codevault)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("CODEVAULT_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    separate_parser = subparsers.add_parser("separate", help="Print the HTML/CSS/JS split of a file as JSON")
    separate_parser.add_argument("path", help="Source file, or - for stdin")
    separate_parser.set_defaults(handler=cmd_separate)

    preview_parser = subparsers.add_parser("preview", help="Build a standalone preview document")
    preview_parser.add_argument("path", help="Source file, or - for stdin")
    preview_parser.add_argument("--output", "-o", type=str, help="Output file path (if not specified, prints to stdout)")
    preview_parser.add_argument("--dark", action="store_true", help="Use the dark body palette")
    preview_parser.set_defaults(handler=cmd_preview)

    save_parser = subparsers.add_parser("save", help="Separate files and save them as snippets")
    save_parser.add_argument("paths", nargs="+", help="Source files to save")
    save_parser.add_argument("--title", help="Snippet title (default: the file name)")
    save_parser.add_argument("--folder", default=DEFAULT_FOLDER_ID, help="Folder id (default: default)")
    save_parser.set_defaults(handler=cmd_save)

    list_parser = subparsers.add_parser("list", help="List snippets in a folder, or search all of them")
    list_parser.add_argument("--folder", default=DEFAULT_FOLDER_ID, help="Folder id (default: default)")
    list_parser.add_argument("--query", "-q", help="Case-insensitive match on title or folder id")
    list_parser.set_defaults(handler=cmd_list)

    delete_parser = subparsers.add_parser("delete", help="Delete a snippet by id")
    delete_parser.add_argument("snippet_id")
    delete_parser.set_defaults(handler=cmd_delete)

    folders_parser = subparsers.add_parser("folders", help="List folders")
    folders_parser.set_defaults(handler=cmd_folders)

    mkdir_parser = subparsers.add_parser("mkdir", help="Create a folder")
    mkdir_parser.add_argument("name")
    mkdir_parser.set_defaults(handler=cmd_mkdir)

    rmdir_parser = subparsers.add_parser("rmdir", help="Delete a folder (its snippets are kept)")
    rmdir_parser.add_argument("folder_id")
    rmdir_parser.set_defaults(handler=cmd_rmdir)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    store = SnippetStore(create_backend(args.store))

    try:
        return args.handler(args, store)
    except KeyboardInterrupt:
        print("\n⚠️ Interrupted", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
