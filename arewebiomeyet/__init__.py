"""are-we-biome-yet — how much of your ESLint config does Biome cover?"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("are-we-biome-yet")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
