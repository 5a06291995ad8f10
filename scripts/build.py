#!/usr/bin/env python3
"""
Build the Lambda dependency layer.

Installs the runtime dependencies of the API functions (the lambda-layer
extra in pyproject.toml) into build/layer/python, the directory the
OpenAPIRestAPI construct packages as a LayerVersion on synth.
"""
import shutil
import subprocess
import sys
import tomllib
from pathlib import Path

LAYER_EXTRA = "lambda-layer"
PLATFORM = "manylinux2014_x86_64"
PYTHON_VERSION = "3.12"


def layer_requirements(pyproject_path: Path) -> list:
    """Requirements of the lambda-layer extra."""
    with open(pyproject_path, "rb") as pyproject_file:
        pyproject = tomllib.load(pyproject_file)

    extras = pyproject["project"].get("optional-dependencies", {})
    if LAYER_EXTRA not in extras:
        raise SystemExit(f"No [{LAYER_EXTRA}] extra found in {pyproject_path}")
    return list(extras[LAYER_EXTRA])


def main():
    """Main build function"""
    project_root = Path(__file__).parent.parent
    layer_dir = project_root / "build" / "layer"
    target_dir = layer_dir / "python"

    requirements = layer_requirements(project_root / "pyproject.toml")
    print(f"Building dependency layer: {requirements}")

    if layer_dir.exists():
        shutil.rmtree(layer_dir)
    target_dir.mkdir(parents=True)

    # Wheels must match the Lambda runtime, not the build host
    subprocess.run([
        sys.executable, "-m", "pip", "install",
        *requirements,
        "--target", str(target_dir),
        "--platform", PLATFORM,
        "--python-version", PYTHON_VERSION,
        "--implementation", "cp",
        "--only-binary=:all:",
        "--upgrade",
    ], check=True)

    # Caches are not needed at runtime
    for cache_dir in target_dir.rglob("__pycache__"):
        shutil.rmtree(cache_dir, ignore_errors=True)

    print(f"Layer built in {layer_dir}")
    print("Build complete!")


if __name__ == "__main__":
    main()
