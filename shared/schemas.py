"""Pydantic schemas for activity templates, runtime task state and persisted records.

Template models are immutable definitions. Runtime models (Photo, TaskState, IssueReport)
are frozen too: the session controller replaces them with model_copy(update=...) rather
than mutating them, which keeps change detection to a simple identity check.
"""
from datetime import datetime
from typing import Optional, Dict, Any, Tuple

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from shared.enums import (
    ActivityType, PhaseName, Season, Occupancy, PhotoStatus, TaskAction, PriorityLevel,
    IssueType, AnnotationKind, AlertLevel, SensitivityLevel, HomeStatus, BookingStatus,
)
from shared.utils import season_for


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')


# ==================== TEMPLATE DEFINITIONS ====================

class TaskConditional(FrozenModel):
    """Visibility predicates; every predicate that is set must match the session context."""
    season: Optional[Season] = None
    occupancy: Optional[Occupancy] = None


class TaskTemplate(FrozenModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ''
    required: bool = False
    photo_required: bool = False
    photo_count: Optional[int] = Field(default=None, ge=1)
    order: int = 0
    estimated_time: int = Field(default=0, ge=0, description="Minutes")
    dependencies: Tuple[str, ...] = ()
    conditional: Optional[TaskConditional] = None
    action: Optional[TaskAction] = None
    subject: Optional[str] = None
    location: Optional[str] = None
    priority: Optional[PriorityLevel] = None

    @field_validator('dependencies')
    @classmethod
    def no_self_dependency(cls, v, info):
        task_id = info.data.get('id')
        if task_id and task_id in v:
            raise ValueError(f"Task {task_id} cannot depend on itself")
        return v


class RoomTemplate(FrozenModel):
    id: str = Field(..., min_length=1)
    code: str
    name: str
    location: Optional[str] = None
    tasks: Tuple[TaskTemplate, ...] = ()


class PhaseTemplate(FrozenModel):
    id: str = Field(..., min_length=1)
    name: PhaseName
    order: int
    tasks: Tuple[TaskTemplate, ...] = ()
    rooms: Tuple[RoomTemplate, ...] = ()

    @model_validator(mode='after')
    def has_content(self):
        if not self.tasks and not any(room.tasks for room in self.rooms):
            raise ValueError(f"Phase {self.id} has neither tasks nor rooms with tasks")
        return self


class WifiNetwork(FrozenModel):
    name: str
    password: str
    location: Optional[str] = None


class PropertyAlert(FrozenModel):
    type: AlertLevel
    message: str


class HeatingInfo(FrozenModel):
    type: str
    location: str
    summer_setting: str
    winter_settings: Dict[str, str] = Field(default_factory=dict)


class ExitInstructions(FrozenModel):
    locking: Optional[str] = None
    refuse: Optional[str] = None
    checkout: Optional[str] = None


class PropertyMetadata(FrozenModel):
    """Property-specific facts shipped with a property template."""
    property_code: str
    property_name: str
    version: str
    sensitivity_level: SensitivityLevel = SensitivityLevel.LOW
    has_doorman: bool = False
    storage: Tuple[str, ...] = ()
    heating: Optional[HeatingInfo] = None
    wifi: Tuple[WifiNetwork, ...] = ()
    alerts: Tuple[PropertyAlert, ...] = ()
    exit_instructions: Optional[ExitInstructions] = None
    check_instructions: Tuple[str, ...] = ()


class ActivityTemplate(FrozenModel):
    """Either flat (tasks) or phased (phases); never both, never neither."""
    type: ActivityType
    name: str
    description: str = ''
    estimated_total_time: int = Field(default=0, ge=0, description="Minutes")
    tasks: Tuple[TaskTemplate, ...] = ()
    phases: Tuple[PhaseTemplate, ...] = ()
    metadata: Optional[PropertyMetadata] = None

    @model_validator(mode='after')
    def exactly_one_layout(self):
        if bool(self.tasks) == bool(self.phases):
            raise ValueError(
                f"Template '{self.name}' must define exactly one of tasks or phases"
            )
        return self

    @property
    def is_phased(self):
        return bool(self.phases)

    @property
    def property_code(self):
        return self.metadata.property_code if self.metadata else None


# ==================== RUNTIME STATE ====================

class SessionContext(FrozenModel):
    """Season/occupancy the conditional tasks are evaluated against."""
    season: Season = Field(default_factory=season_for)
    occupancy: Occupancy = Occupancy.BOOKING


class PhotoAnnotation(FrozenModel):
    id: str
    kind: AnnotationKind
    x: float = Field(..., ge=0.0, le=1.0, description="Relative horizontal position")
    y: float = Field(..., ge=0.0, le=1.0, description="Relative vertical position")
    text: Optional[str] = None
    color: Optional[str] = None


class Photo(FrozenModel):
    id: str
    local_path: str
    status: PhotoStatus = PhotoStatus.IN_QUEUE
    uploaded_at: Optional[datetime] = None
    url: Optional[str] = None
    annotations: Tuple[PhotoAnnotation, ...] = ()
    file_name: Optional[str] = None
    size: Optional[int] = None
    retry_count: int = 0
    error: Optional[str] = None


class IssueReport(FrozenModel):
    issue_type: Optional[IssueType] = None
    location: Optional[str] = None
    item_affected: Optional[str] = None
    priority: Optional[PriorityLevel] = None


class TaskState(FrozenModel):
    id: str
    completed: bool = False
    completed_at: Optional[datetime] = None
    photos: Tuple[Photo, ...] = ()
    notes: str = ''
    report_issue: bool = False
    issue_report: Optional[IssueReport] = None

    @property
    def uploaded_photo_count(self):
        return sum(1 for p in self.photos if p.status == PhotoStatus.UPLOADED)

    def find_photo(self, photo_id):
        for photo in self.photos:
            if photo.id == photo_id:
                return photo
        return None


class ActivityDraft(BaseModel):
    """Persisted unit for an in-progress activity, stored under its session key."""
    task_states: Dict[str, TaskState] = Field(default_factory=dict)
    activity_notes: str = ''
    saved_at: Optional[datetime] = None


class ActivityMetadata(BaseModel):
    """Companion record written next to a draft so it can be resolved without parsing keys."""
    session_key: str
    home_id: str
    home_code: str
    home_name: Optional[str] = None
    activity_type: ActivityType
    property_code: Optional[str] = None
    booking_id: Optional[str] = None
    activity_id: Optional[str] = None
    started_at: Optional[datetime] = None
    context: Optional[SessionContext] = None


class ActiveActivityInfo(FrozenModel):
    session_key: str
    home_id: str
    home_code: str
    home_name: Optional[str] = None
    activity_type: ActivityType
    completed_tasks: int
    total_tasks: int


class GuestReportSubmission(BaseModel):
    """Hand-back from the guest report sub-flow; presence means the report is complete."""
    session_key: str
    submitted_at: datetime
    answers: Dict[str, Any] = Field(default_factory=dict)


# ==================== DERIVED VIEWS ====================

class ProgressCounts(FrozenModel):
    completed: int = 0
    total: int = 0
    percent: int = 0

    @classmethod
    def of(cls, completed, total):
        percent = 0 if total == 0 else round(100 * completed / total)
        return cls(completed=completed, total=total, percent=percent)


class PhotoCounts(FrozenModel):
    total: int = 0
    uploaded: int = 0
    queued: int = 0
    failed: int = 0


class PhaseProgress(FrozenModel):
    phase_id: str
    name: PhaseName
    order: int
    locked: bool
    counts: ProgressCounts


class TaskView(FrozenModel):
    """Read-only projection of one task for a UI row."""
    task: TaskTemplate
    state: TaskState
    visible: bool
    locked: bool
    can_complete: bool
    phase_id: Optional[str] = None
    room_id: Optional[str] = None


class QueuedPhotoView(FrozenModel):
    photo_id: str
    task_id: str
    task_name: str
    file_name: str
    size: int = 0
    status: PhotoStatus


class UploadResult(FrozenModel):
    """Outcome of one enqueue, posted by the upload workers for the controller to apply."""
    photo_id: str
    task_id: str
    status: PhotoStatus
    url: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    error: Optional[str] = None
    attempts: int = 0


# ==================== DIRECTORY ====================

class Coordinates(FrozenModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class Home(FrozenModel):
    id: str
    code: str
    name: Optional[str] = None
    address: str = ''
    city: str = ''
    status: HomeStatus = HomeStatus.VACANT
    coordinates: Optional[Coordinates] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None


class Booking(FrozenModel):
    id: str
    booking_id: str
    guest_name: str
    home_id: str
    home_code: str
    check_in: datetime
    check_out: datetime
    status: BookingStatus = BookingStatus.UPCOMING
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    number_of_guests: Optional[int] = None
    special_requests: Optional[str] = None


# ==================== COMPLETION RECORD ====================

class CompletedPhoto(FrozenModel):
    id: str
    file_name: Optional[str] = None
    status: PhotoStatus
    uploaded_at: Optional[datetime] = None
    url: Optional[str] = None
    annotations: Tuple[PhotoAnnotation, ...] = ()


class CompletedTask(FrozenModel):
    id: str
    name: str
    required: bool
    completed: bool
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    report_issue: bool = False
    issue_report: Optional[IssueReport] = None
    photos: Tuple[CompletedPhoto, ...] = ()


class CompletionRecord(FrozenModel):
    """Everything an external report generator needs; the engine does not render it."""
    session_key: str
    activity_type: ActivityType
    activity_name: str
    activity_id: Optional[str] = None
    home_id: str
    home_code: str
    home_name: Optional[str] = None
    home_address: Optional[str] = None
    home_coordinates: Optional[Coordinates] = None
    booking_id: Optional[str] = None
    guest_name: Optional[str] = None
    completed_by: Optional[str] = None
    tasks: Tuple[CompletedTask, ...] = ()
    activity_notes: str = ''
    property_metadata: Optional[PropertyMetadata] = None
    started_at: Optional[datetime] = None
    completed_at: datetime
    completed_tasks: int
    total_tasks: int
    total_photos: int
    uploaded_photos: int
