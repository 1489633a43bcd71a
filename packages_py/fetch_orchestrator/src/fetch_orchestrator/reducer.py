"""
Pure state transitions for the fetcher state machine.
"""
from dataclasses import replace

from .types import FetchState, FetchStatus, FetcherAction, FetcherActionType


def fetcher_reducer(state: FetchState, action: FetcherAction) -> FetchState:
    """
    Apply an action to a state and return the next state.

    Returns the same object when the action changes nothing, so callers can
    skip publishing.
    """
    if action.type == FetcherActionType.START:
        return replace(state, status=FetchStatus.LOADING, loading=True)

    if action.type == FetcherActionType.RESOLVE:
        return replace(
            state, status=FetchStatus.SUCCESS, loading=False, data=action.payload
        )

    if action.type == FetcherActionType.REJECT:
        return replace(
            state, status=FetchStatus.ERROR, loading=False, error=action.payload
        )

    if action.type == FetcherActionType.SETTLE:
        if not state.loading:
            return state
        status = FetchStatus.IDLE if state.status == FetchStatus.LOADING else state.status
        return replace(state, status=status, loading=False)

    return state


def start() -> FetcherAction:
    return FetcherAction(type=FetcherActionType.START)


def resolve(data) -> FetcherAction:
    return FetcherAction(type=FetcherActionType.RESOLVE, payload=data)


def reject(error) -> FetcherAction:
    return FetcherAction(type=FetcherActionType.REJECT, payload=error)


def settle() -> FetcherAction:
    return FetcherAction(type=FetcherActionType.SETTLE)
