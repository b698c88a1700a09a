"""agent2manifests — render Service and Instrumentation manifests for CloudWatch agents."""

import argparse
import os
import sys
from pathlib import Path

import yaml

from agent2manifests.core.config import (
    CONFIG_FILE, default_ports_from_config, instrumentation_images, load_config,
    save_config,
)
from agent2manifests.core.constants import AGENT_KIND
from agent2manifests.core.errors import ManifestError
from agent2manifests.manifests.instrumentation import build_default_instrumentation
from agent2manifests.manifests.service import (
    build_monitoring_service, build_service, headless_from,
)
from agent2manifests.pacts.types import AgentSpec, BuildContext


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _yaml_files(source: str) -> list[Path]:
    path = Path(source)
    if path.is_file():
        return [path]
    return sorted(p for p in path.rglob("*") if p.suffix in (".yaml", ".yml"))


def parse_manifests(source: str) -> dict[str, list[dict]]:
    """Load all YAML documents from a file or directory, classify by kind."""
    manifests: dict[str, list[dict]] = {}
    for yaml_file in _yaml_files(source):
        try:
            with open(yaml_file, encoding="utf-8") as f:
                for doc in yaml.safe_load_all(f):
                    if not doc or not isinstance(doc, dict):
                        continue
                    kind = doc.get("kind", "Unknown")
                    manifests.setdefault(kind, []).append(doc)
        except yaml.YAMLError as exc:
            print(f"⚠ Skipping {yaml_file.name}: {exc.__class__.__name__}",
                  file=sys.stderr)
    return manifests


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def _convert_one(spec: AgentSpec, ctx: BuildContext) -> list[dict]:
    """Build every Service an agent needs; absent variants are left out."""
    full = f"{AGENT_KIND}/{spec.namespace + '/' if spec.namespace else ''}{spec.name}"
    result = []

    svc = build_service(spec, ctx)
    if svc is None:
        ctx.warnings.append(f"{full} doesn't expose any ports — no Service generated")
    else:
        result.append(svc)
        result.append(headless_from(svc, spec))

    try:
        result.append(build_monitoring_service(spec))
    except ManifestError as exc:
        ctx.warnings.append(f"{full}: monitoring Service skipped ({exc})")
    return result


def convert(manifests: dict[str, list[dict]], config: dict) -> tuple[list[dict], list[str]]:
    """Main conversion: returns (descriptors, warnings)."""
    descriptors: list[dict] = []
    warnings: list[str] = []
    for manifest in manifests.get(AGENT_KIND, []):
        try:
            spec = AgentSpec.from_manifest(manifest)
        except ManifestError as exc:
            name = (manifest.get("metadata") or {}).get("name", "unknown")
            warnings.append(f"{AGENT_KIND}/{name} skipped ({exc})")
            continue
        # fresh context per agent, only the warnings are shared
        ctx = BuildContext(default_ports=default_ports_from_config(config),
                           warnings=warnings)
        descriptors.extend(_convert_one(spec, ctx))
    return descriptors, warnings


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def write_manifests(descriptors: list[dict], output_dir: str,
                    filename: str = "manifests.yaml") -> str:
    """Write all descriptors as one multi-document YAML file, return its path."""
    path = os.path.join(output_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Generated by agent2manifests — do not edit manually\n")
        yaml.dump_all(descriptors, f, default_flow_style=False, sort_keys=False,
                      explicit_start=True)
    print(f"Wrote {path}", file=sys.stderr)
    return path


def emit_warnings(warnings: list[str]) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render Service and Instrumentation manifests for CloudWatch agents"
    )
    parser.add_argument(
        "--from", dest="source", required=True,
        help="YAML file or directory containing AmazonCloudWatchAgent resources",
    )
    parser.add_argument(
        "--output-dir", default=".",
        help="Where to write the generated manifests (default: .)",
    )
    parser.add_argument(
        "--output-file", default="manifests.yaml",
        help="Name of the generated manifest file (default: manifests.yaml)",
    )
    parser.add_argument(
        "--config",
        help=f"Path to the configuration file (default: <output-dir>/{CONFIG_FILE})",
    )
    parser.add_argument(
        "--instrumentation", action="store_true",
        help="Also render the default Instrumentation resource "
             "(images from config or AUTO_INSTRUMENTATION_JAVA/PYTHON)",
    )
    args = parser.parse_args(argv)

    if not os.path.exists(args.source):
        print(f"Source not found: {args.source}", file=sys.stderr)
        sys.exit(1)
    os.makedirs(args.output_dir, exist_ok=True)

    manifests = parse_manifests(args.source)
    agents = len(manifests.get(AGENT_KIND, []))
    print(f"Parsed agents: {agents}", file=sys.stderr)

    config_path = args.config or os.path.join(args.output_dir, CONFIG_FILE)
    first_run = not os.path.exists(config_path)
    config = load_config(config_path)
    descriptors, warnings = convert(manifests, config)

    if args.instrumentation:
        try:
            descriptors.append(build_default_instrumentation(instrumentation_images(config)))
        except ManifestError as exc:
            emit_warnings(warnings)
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)

    emit_warnings(warnings)

    if not descriptors:
        print("No manifests generated — nothing to write.", file=sys.stderr)
        sys.exit(1)

    write_manifests(descriptors, args.output_dir, filename=args.output_file)

    if first_run:
        save_config(config_path, config)
        print(f"Wrote {config_path}", file=sys.stderr)
        print(
            f"\n⚠ First run — {os.path.basename(config_path)} was created with the defaults.\n"
            "  Set defaultPorts or instrumentation images there and re-run.",
            file=sys.stderr,
        )


if __name__ == "__main__":
    main()
