import enum


class ActivityType(str, enum.Enum):
    """Activity types a staff member can run at a home.

    Every member has a generic template, so template lookup is total.
    """
    ADHOC = "adhoc"
    DEPROVISIONING = "deprovisioning"
    MEET_GREET = "meet-greet"
    MAID_SERVICE = "maid-service"
    PROVISIONING = "provisioning"
    TURN = "turn"


class PhaseName(str, enum.Enum):
    """Top-level stages of a phased template."""
    ARRIVE = "arrive"
    DURING = "during"
    DEPART = "depart"


class Season(str, enum.Enum):
    """Season predicate used by conditional tasks."""
    SUMMER = "summer"
    WINTER = "winter"


class Occupancy(str, enum.Enum):
    """Occupancy predicate used by conditional tasks."""
    BOOKING = "booking"
    EMPTY = "empty"
    HOST = "host"


class PhotoStatus(str, enum.Enum):
    """Upload lifecycle of a task photo."""
    IN_QUEUE = "in-queue"
    UPLOADED = "uploaded"
    FAILED = "failed"


class TaskAction(str, enum.Enum):
    """Verb attached to phase-based template tasks."""
    CHECK = "Check"
    BAG_AND_TAG = "Bag and tag"
    SEAL = "Seal"
    PREPARE_FOR_GUEST = "Prepare For Guest"
    CONNECT = "Connect"
    LEAVE_OUT = "Leave out"
    SET = "Set"
    TROUBLESHOOT = "Troubleshoot"
    SWEEP = "Sweep"
    QUALITY_CHECK = "Quality check"
    SECURE = "Secure"
    TURN_OFF = "Turn off"
    EMPTY = "Empty"
    FILL_OUT = "Fill out"
    VACUUM = "Vacuum"
    TEST = "Test"
    VERIFY = "Verify"
    PHOTOGRAPH = "Photograph"
    SHOW = "Show"
    EXPLAIN = "Explain"
    DEMONSTRATE = "Demonstrate"
    REVIEW = "Review"
    WELCOME = "Welcome"
    ANSWER_QUESTIONS = "Answer Questions"


class PriorityLevel(str, enum.Enum):
    """Priority levels for template tasks and issue reports."""
    HIGH = "high"
    LOW = "low"
    MEDIUM = "medium"


class IssueType(str, enum.Enum):
    """Categories for an issue raised against a task."""
    DAMAGE = "damage"
    MALFUNCTION = "malfunction"
    MAINTENANCE = "maintenance"
    MISSING_ITEM = "missing-item"
    CLEANING = "cleaning"
    OTHER = "other"


class AnnotationKind(str, enum.Enum):
    """Shapes a staff member can draw on a photo."""
    ARROW = "arrow"
    CIRCLE = "circle"
    TEXT = "text"
    FREEHAND = "freehand"


class AlertLevel(str, enum.Enum):
    """Severity of a property alert shown with a template."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class SensitivityLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SessionStatus(str, enum.Enum):
    """Lifecycle of a single activity session.

    NOT_STARTED -> IN_PROGRESS <-> READY_TO_COMPLETE -> COMPLETING -> COMPLETED,
    with IN_PROGRESS/READY_TO_COMPLETE -> ABANDONED on save-and-exit or discard.
    """
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    READY_TO_COMPLETE = "ready_to_complete"
    COMPLETING = "completing"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class ConflictResolution(str, enum.Enum):
    """User choices when a second activity is opened over an active one."""
    SAVE_AND_SWITCH = "save_and_switch"
    DISCARD_AND_SWITCH = "discard_and_switch"
    CANCEL = "cancel"


class CompletionOutcome(str, enum.Enum):
    """Result of asking a session to complete."""
    COMPLETED = "completed"
    REPORT_REQUIRED = "report_required"


class HomeStatus(str, enum.Enum):
    OCCUPIED = "occupied"
    VACANT = "vacant"
    MAINTENANCE = "maintenance"
    PREPARING = "preparing"


class BookingStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    CURRENT = "current"
    DEPARTURE = "departure"
    COMPLETED = "completed"


# Activity types whose completion also needs the guest report sub-flow.
# Fixed list, independent of which template a property uses.
GUEST_FACING_ACTIVITY_TYPES = frozenset({ActivityType.MEET_GREET})
