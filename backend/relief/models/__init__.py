from relief.models.activity_log import ActivityLog  # noqa: F401
from relief.models.relief_assignment import ReliefAssignment  # noqa: F401
from relief.models.stored_collection import StoredCollection  # noqa: F401
