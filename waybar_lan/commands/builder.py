"""Assemblage des lignes de commande des sondes.

Example:
    La sonde ICMP du balayage :

        build_ping_command("192.168.1.42")
        # ["ping", "-c", "1", "-W", "1", "-q", "192.168.1.42"]
"""

from typing import List


class CommandBuilder:
    """Assemble programme, options puis arguments positionnels.

    Les options sont toujours placees avant les arguments, quel
    que soit l'ordre des appels.
    """

    def __init__(self, program: str) -> None:
        """
        Args:
            program: Executable a lancer.

        Raises:
            ValueError: Si program est vide.
        """
        if not program or not program.strip():
            raise ValueError("Programme manquant pour la commande")
        self._program = program
        self._options: List[str] = []
        self._args: List[str] = []

    def with_flag(self, flag: str) -> "CommandBuilder":
        self._options.append(flag)
        return self

    def with_value(self, flag: str, value: str) -> "CommandBuilder":
        """Ajoute une option et sa valeur en deux elements.

        iputils attend ['-W', '1'] et refuse '-W=1'.
        """
        self._options += [flag, value]
        return self

    def with_args(self, args: List[str]) -> "CommandBuilder":
        self._args += list(args)
        return self

    def build(self) -> List[str]:
        return [self._program, *self._options, *self._args]


def build_ping_command(ip: str, timeout: int = 1) -> List[str]:
    """Sonde ICMP silencieuse a un seul paquet.

    Args:
        ip: Adresse cible.
        timeout: Attente max de la reponse en secondes (-W).
    """
    return (
        CommandBuilder("ping")
        .with_value("-c", "1")
        .with_value("-W", str(timeout))
        .with_flag("-q")
        .with_args([ip])
        .build()
    )
