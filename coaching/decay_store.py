from typing import Dict, Iterable, List, Optional


class MessageDecayStore:
    """
    Keeps each message visible for a fixed TTL after it was last emitted.

    Re-emitting a message re-arms its expiry to now + ttl (never stacks).
    Entries whose expiry is earlier than now are dropped on prune().
    """

    def __init__(self, ttl_ms: float = 3000.0):
        self.ttl_ms = float(ttl_ms)
        self._expiry: Dict[str, float] = {}

    def __contains__(self, message: str) -> bool:
        return message in self._expiry

    def __len__(self) -> int:
        return len(self._expiry)

    def expiry(self, message: str) -> Optional[float]:
        return self._expiry.get(message)

    def refresh(self, messages: Iterable[str], now_ms: float):
        for msg in messages:
            self._expiry[msg] = now_ms + self.ttl_ms

    def prune(self, now_ms: float):
        expired = [msg for msg, exp in self._expiry.items() if exp < now_ms]
        for msg in expired:
            del self._expiry[msg]

    def active(self) -> List[str]:
        return list(self._expiry.keys())

    def advance(self, messages: Iterable[str], now_ms: float) -> List[str]:
        self.refresh(messages, now_ms)
        self.prune(now_ms)
        return self.active()

    def clear(self):
        self._expiry.clear()
