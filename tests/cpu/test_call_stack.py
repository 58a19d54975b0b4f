from __future__ import annotations

import pytest

from pychip8.cpu import STACK_CAPACITY, CallStack, StackOverflowError, StackUnderflowError


def test_push_pop_is_last_in_first_out() -> None:
    stack = CallStack()
    stack.push(0x202)
    stack.push(0x35A)

    assert stack.peek() == 0x35A
    assert stack.pop() == 0x35A
    assert stack.pop() == 0x202
    assert stack.depth == 0


def test_overflow_leaves_entries_intact() -> None:
    stack = CallStack()
    for address in range(STACK_CAPACITY):
        stack.push(0x200 + address * 2)

    with pytest.raises(StackOverflowError):
        stack.push(0x400)

    assert stack.depth == STACK_CAPACITY
    assert stack.peek() == 0x200 + (STACK_CAPACITY - 1) * 2


def test_underflow_raises() -> None:
    with pytest.raises(StackUnderflowError):
        CallStack().pop()


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        CallStack(0)
