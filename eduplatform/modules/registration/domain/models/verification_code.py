# 📄 File: eduplatform/modules/registration/domain/models/verification_code.py
# 🧭 Purpose (Layman Explanation):
# The six little boxes where people type the code from the verification email,
# including jumping to the next box, going back on delete and pasting the code.
# 🧪 Purpose (Technical Summary):
# Fixed-position digit slots with a focus index. Pure local state; nothing here
# talks to a collaborator.
# 🔗 Dependencies:
# re, typing
# 🔄 Connected Modules / Calls From:
# Registration wizard (email verification step)

import re
from typing import List

CODE_LENGTH = 6

_NON_DIGITS = re.compile(r"[^0-9]")


class VerificationCode:
    """
    Verification code input made of single-character numeric slots.

    Rules:
    - A non-empty entry in slot i moves focus to slot i+1 (never past the last)
    - Backspace on an empty slot moves focus to slot i-1 (never before 0);
      on a filled slot it clears that slot
    - Paste keeps only digits, at most ``length`` of them, fills slots from
      the left and clears the rest
    """

    def __init__(self, length: int = CODE_LENGTH):
        if length < 1:
            raise ValueError("Verification code length must be positive")
        self.length = length
        self.slots: List[str] = [""] * length
        self.focus = 0

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.length:
            raise IndexError(f"Slot index out of range: {index}")

    @property
    def is_complete(self) -> bool:
        return all(slot != "" for slot in self.slots)

    @property
    def value(self) -> str:
        return "".join(self.slots)

    def enter(self, index: int, char: str) -> bool:
        """
        Set one slot.

        Args:
            index: Slot position
            char: Single digit, or "" to clear the slot

        Returns:
            True if the slot changed; multi-character and non-digit input is ignored
        """
        self._check_index(index)
        char = char or ""
        if len(char) > 1 or _NON_DIGITS.search(char):
            return False

        self.slots[index] = char
        if char and index < self.length - 1:
            self.focus = index + 1
        else:
            self.focus = index
        return True

    def backspace(self, index: int) -> None:
        self._check_index(index)
        if self.slots[index]:
            self.slots[index] = ""
            self.focus = index
        elif index > 0:
            self.focus = index - 1
        else:
            self.focus = 0

    def paste(self, text: str) -> bool:
        """
        Distribute the digits of ``text`` over the slots.

        Returns:
            False when ``text`` holds no digit (slots untouched)
        """
        digits = _NON_DIGITS.sub("", text or "")[:self.length]
        if not digits:
            return False

        self.slots = list(digits) + [""] * (self.length - len(digits))
        self.focus = min(len(digits), self.length - 1)
        return True

    def clear(self) -> None:
        self.slots = [""] * self.length
        self.focus = 0

    def __repr__(self) -> str:
        return f"VerificationCode(slots={self.slots}, focus={self.focus})"
