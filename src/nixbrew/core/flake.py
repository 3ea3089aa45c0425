"""Generation of per-package flake.nix files."""

from pathlib import Path

from nixbrew.core.resolver import default_reference, flake_of

UNSTABLE_NIXPKGS_URL = "github:NixOS/nixpkgs/nixos-unstable"

FLAKE_TEMPLATE = """\
{{
  description = "Nix flake for {package} package";

  inputs = {{
    nixpkgs.url = "{nixpkgs_url}";
  }};

  outputs = {{ self, nixpkgs }}:
    let
      system = "{system}";
      pkgs = nixpkgs.legacyPackages.${{system}};
    in {{
      packages.${{system}}.default = pkgs.{package};
      defaultPackage.${{system}} = pkgs.{package};
    }};
}}
"""


def nixpkgs_input_url(reference: str, package: str) -> str:
    """Pick the nixpkgs input URL for a resolved reference.

    The unpinned default reference maps to nixos-unstable; any other reference
    contributes its flake part ("nixpkgs/23.11", "github:NixOS/nixpkgs/cb82756").
    """
    if reference == default_reference(package):
        return UNSTABLE_NIXPKGS_URL
    return flake_of(reference)


def render_package_flake(package: str, reference: str, *, system: str) -> str:
    return FLAKE_TEMPLATE.format(
        package=package,
        nixpkgs_url=nixpkgs_input_url(reference, package),
        system=system,
    )


def write_package_flake(flakes_dir: Path, package: str, content: str) -> Path:
    """Write flake.nix under flakes_dir/<package>/, creating directories.

    Returns:
        Path to the written flake.nix
    """
    flake_dir = flakes_dir / package
    flake_dir.mkdir(parents=True, exist_ok=True)
    flake_path = flake_dir / "flake.nix"
    flake_path.write_text(content, encoding="utf-8")
    return flake_path
