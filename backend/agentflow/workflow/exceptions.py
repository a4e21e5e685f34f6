# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Exceptions

Custom exceptions for the node model, graph mutations and generation.
"""


class WorkflowException(Exception):
    """Base exception for workflow graph operations"""
    pass


class WorkflowValidationError(WorkflowException):
    """Node list violates a well-formedness rule"""
    def __init__(self, message: str, field: str = None):
        self.message = message
        self.field = field
        super().__init__(message)


class NodeNotFoundError(WorkflowException):
    """Operation addressed a node id that is not in the list"""
    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' not found")


class InvalidReferenceError(WorkflowException):
    """Connection target does not name a node in the list"""
    def __init__(self, source_id: str, target_id: str):
        self.source_id = source_id
        self.target_id = target_id
        super().__init__(
            f"Cannot connect '{source_id}' to '{target_id}': target node does not exist"
        )


class GenerationUnparsableError(WorkflowException):
    """Generator output could not be turned into a valid node list"""
    def __init__(self, message: str, raw: str = None):
        self.raw = raw
        super().__init__(message)
