"""CLI entrypoints for nuspecgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError
from .errors import NuspecGenError
from .logging import configure_logging
from .metadata import MetadataExtractor
from .orchestrator import GenerationRequest, Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nuspecgen",
        description="Generate NuGet manifests from compiled assemblies and project metadata.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    parser.add_argument(
        "--msbuild-format",
        action="store_true",
        help="Print warnings and errors as MSBuild canonical messages.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write <target-name>.nuspec into the project directory.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "--target-path", required=True, type=Path, help="Compiled assembly to inspect."
    )
    generate_parser.add_argument(
        "--target-name", required=True, help="Assembly base name, e.g. Contoso.Core."
    )
    generate_parser.add_argument(
        "--project-dir", required=True, type=Path, help="Directory holding the project file."
    )
    generate_parser.add_argument(
        "--project-path", required=True, type=Path, help="Project definition (.csproj)."
    )
    generate_parser.add_argument(
        "--template", required=True, type=Path, help="Skeleton nuspec to fill in."
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the manifest instead of writing it.",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the metadata read from a compiled assembly as JSON.",
    )
    _add_verbose_option(inspect_parser, suppress_default=True)
    inspect_parser.add_argument("artifact", type=Path, help="Compiled assembly to inspect.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing manifest generation.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for nuspecgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), log_file=args.log_file, msbuild=args.msbuild_format
    )

    def fail(command: str, exc: Exception) -> None:
        if args.msbuild_format:
            parser.exit(1, f"nuspecgen : error : {exc}\n")
        parser.exit(1, f"nuspecgen {command} failed: {exc}\n")

    if args.command == "generate":
        request = GenerationRequest(
            target_path=args.target_path,
            target_name=args.target_name,
            project_dir=args.project_dir,
            project_path=args.project_path,
            template_path=args.template,
        )
        try:
            result = Orchestrator().run(request, dry_run=bool(args.dry_run))
        except (NuspecGenError, ConfigError) as exc:
            fail("generate", exc)
        if args.dry_run:
            sys.stdout.write(result.content.decode("utf-8"))
        else:
            print(result.version or "")
    elif args.command == "inspect":
        try:
            metadata = MetadataExtractor().extract(args.artifact)
        except NuspecGenError as exc:
            fail("inspect", exc)
        print(json.dumps(metadata.to_dict(), indent=2))
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
