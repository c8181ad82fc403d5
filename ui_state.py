import streamlit as st

from config import HISTORY_LIMIT
from device_store import with_defaults


def _state(state):
    return st.session_state if state is None else state


def get_repository(state=None):
    state = _state(state)
    if "devices" not in state:
        state["devices"] = with_defaults()
    return state["devices"]


def set_repository(repo, state=None):
    _state(state)["devices"] = repo


def get_history(key, state=None):
    state = _state(state)
    if key not in state:
        state[key] = []
    return state[key]


def push_history(key, entry, limit=HISTORY_LIMIT, state=None):
    """Prepend ``entry`` to the history list under ``key``, newest first."""
    state = _state(state)
    history = [entry] + list(get_history(key, state))[:limit - 1]
    state[key] = history
    return history


def clear_history(key, state=None):
    _state(state)[key] = []
