import argparse
import sys
from pathlib import Path

from .config import build_sitemap, load_config
from .errors import InvalidInput
from .logger import set_log_level


DEFAULT_CONFIG_NAME = "sitemap.config.yml"


def cmd_init(args):
    """Create a starter config file in the current directory."""
    target = Path(args.path or DEFAULT_CONFIG_NAME)
    if target.exists() and not args.force:
        print(f"[WARN] Config file already exists: {target}", file=sys.stderr)
        return 1

    template = """# sitemap-maker config
#
# Usually only two things need editing:
# 1) urls         -- the pages to list, in the order they should appear
# 2) output.path  -- where `sitemap-maker build` writes the XML

sitemap:
  # Timezone used for lastmod values without an explicit offset
  timezone: "Africa/Maputo"
  # Reject changefreq / priority values search engines do not understand
  strict: false

urls:
  - loc: "https://example.com/"
    lastmod: "2024-01-15 10:30:00"
    changefreq: "daily"
    priority: "1.0"

  - loc: "https://example.com/about"
    changefreq: "monthly"
    priority: "0.5"

output:
  path: "sitemap.xml"
"""
    target.write_text(template, encoding="utf-8")
    print(f"[OK] Created config file: {target}")
    return 0


def cmd_build(args):
    """Build the sitemap described by a config file."""
    if getattr(args, "log_level", None):
        set_log_level(args.log_level)

    config_path = Path(args.config or DEFAULT_CONFIG_NAME)
    if not config_path.exists():
        print(
            f"[ERROR] Config file not found: {config_path}. "
            f"Run `sitemap-maker init` first.",
            file=sys.stderr,
        )
        return 1

    try:
        validate = not getattr(args, "no_validate", False)
        config = load_config(config_path, validate=validate)
    except ValueError as e:
        print("[ERROR] Config validation failed:", file=sys.stderr)
        print(f"{e}", file=sys.stderr)
        print("\nHint: --no-validate skips validation (not recommended)", file=sys.stderr)
        return 1
    except Exception as e:  # noqa: BLE001
        print(f"[ERROR] Failed to load config: {e}", file=sys.stderr)
        return 1

    try:
        sitemap = build_sitemap(config)
        if args.stdout:
            sys.stdout.write(sitemap.get())
            sys.stdout.write("\n")
            return 0
        output_path = Path(args.output or config.output.path)
        sitemap.save(output_path)
    except InvalidInput as e:
        print(f"[ERROR] Invalid sitemap entry: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"[ERROR] Failed to write sitemap: {e}", file=sys.stderr)
        return 1

    print(f"[OK] Sitemap with {len(sitemap)} URLs written to: {output_path}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="sitemap-maker",
        description="Build sitemaps.org XML sitemaps from a list of URLs.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # init
    p_init = subparsers.add_parser(
        "init", help=f"Create a starter {DEFAULT_CONFIG_NAME} in current directory."
    )
    p_init.add_argument(
        "-p",
        "--path",
        help=f"Config file path (default: {DEFAULT_CONFIG_NAME})",
    )
    p_init.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing config file.",
    )
    p_init.set_defaults(func=cmd_init)

    # build
    p_build = subparsers.add_parser("build", help="Build sitemap.xml from a config file.")
    p_build.add_argument(
        "-c",
        "--config",
        help=f"Config file path (default: {DEFAULT_CONFIG_NAME})",
    )
    p_build.add_argument(
        "-o",
        "--output",
        help="Output file path (default: output.path from the config).",
    )
    p_build.add_argument(
        "--stdout",
        action="store_true",
        help="Print the XML instead of writing a file.",
    )
    p_build.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip configuration validation (not recommended).",
    )
    p_build.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO).",
    )
    p_build.set_defaults(func=cmd_build)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1

    return int(func(args)) or 0


if __name__ == "__main__":
    raise SystemExit(main())
