"""
Shared route helper utilities.

Reduces boilerplate in the scene routes for config overrides and error
translation.
"""
import logging
from typing import Callable, TypeVar

from fastapi import HTTPException

from scene_engine import SceneConfig

T = TypeVar('T')


def config_for_request(base: SceneConfig, request) -> SceneConfig:
    """
    Apply the optional fields of a SceneRequest on top of the base config.

    Args:
        base: Configured SceneConfig
        request: SceneRequest instance

    Returns:
        New SceneConfig for this request
    """
    config = base.copy()
    config.width = request.width
    config.height = request.height
    if request.dark is not None:
        config.dark_background = request.dark
    if request.motto is not None:
        config.motto_text = request.motto
    if request.vertical is not None:
        config.motto_vertical = request.vertical
    return config


def scene_operation(operation: Callable[[], T], error_context: str = "operation") -> T:
    """
    Execute a scene operation with standard error handling.

    Args:
        operation: Callable doing the work
        error_context: Context string for error logging

    Returns:
        The operation's result

    Raises:
        HTTPException: 400 for invalid input, 500 for anything else
    """
    try:
        return operation()
    except HTTPException:
        raise
    except ValueError as e:
        logging.warning(f"Rejected {error_context}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logging.error(f"Failed to {error_context}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
