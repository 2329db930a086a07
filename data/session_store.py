"""Typed wrapper around st.session_state for the current allocation run."""

import streamlit as st
from typing import List
from datetime import datetime

from engine.stages import Event, LotteryState, Reset, initial_state, transition
from models.audit import AuditEntry
from utils.logger import get_logger


logger = get_logger(__name__)


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "lottery_state": initial_state(),
        "audit_log": [],
        "import_warnings": [],
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_state() -> LotteryState:
    return st.session_state.get("lottery_state", initial_state())


def get_audit_log() -> List[AuditEntry]:
    return st.session_state.get("audit_log", [])


def get_import_warnings() -> List[str]:
    return st.session_state.get("import_warnings", [])


# --- Setters ---

def set_import_warnings(warnings: List[str]):
    st.session_state["import_warnings"] = list(warnings)


def dispatch(event: Event) -> LotteryState:
    """Apply a stage event to the stored run state and return the new state."""
    current = get_state()
    new_state = transition(current, event)
    st.session_state["lottery_state"] = new_state
    logger.info("Stage %s -> %s", current.stage.value, new_state.stage.value)
    return new_state


def reset_run(reason: str = ""):
    """Discard the whole run and return to the import stage."""
    dispatch(Reset(reason))
    set_import_warnings([])
    add_audit_entry("reset", reason or "Run discarded")


# --- Audit ---

def add_audit_entry(action: str, detail: str = ""):
    entry = AuditEntry(
        timestamp=datetime.now(),
        action=action,
        detail=detail,
    )
    st.session_state["audit_log"].append(entry)
