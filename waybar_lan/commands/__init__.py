"""Module de lancement de commandes système.

Classes disponibles :
    ProbeLauncher : Interface abstraite du lancement fire-and-forget.
    LinuxProbeLauncher : Implémentation via subprocess.
    CommandBuilder : Constructeur fluent de commandes.
"""

from waybar_lan.commands.base import ProbeLauncher
from waybar_lan.commands.builder import CommandBuilder, build_ping_command
from waybar_lan.commands.launcher import LinuxProbeLauncher

__all__ = [
    "ProbeLauncher",
    "LinuxProbeLauncher",
    "CommandBuilder",
    "build_ping_command",
]
