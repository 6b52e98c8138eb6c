from abc import ABC, abstractmethod


class DeleteStrategy(ABC):
    name: str = ""

    @abstractmethod
    def delete(self, directory: str) -> bool:
        """Try to remove *directory* and its contents; return True on success."""
