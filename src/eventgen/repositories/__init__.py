from eventgen.repositories.base import EventRepository, UserRepository
from eventgen.repositories.memory import InMemoryEventRepository, InMemoryUserRepository

__all__ = ["EventRepository", "InMemoryEventRepository", "InMemoryUserRepository", "UserRepository"]
