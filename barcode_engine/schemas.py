from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict
from enum import Enum
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Base model serialising to the camelCase keys used by the JSON records."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class BarcodeFormatEnum(str, Enum):
    """
    Closed enumeration of the supported linear symbologies.

    Format Categories:
    - **Retail**: EAN13, EAN8, UPC
    - **General purpose**: CODE128, CODE39, CODE93
    - **Logistics**: ITF14
    - **Inventory / shelf labelling**: MSI
    - **Healthcare**: pharmacode
    - **Libraries and blood banks**: codabar

    The enum values are the identifiers used on the wire, so the mixed case of
    ``pharmacode`` and ``codabar`` is deliberate.
    """
    CODE128 = "CODE128"
    EAN13 = "EAN13"
    EAN8 = "EAN8"
    UPC = "UPC"
    CODE39 = "CODE39"
    ITF14 = "ITF14"
    MSI = "MSI"
    PHARMACODE = "pharmacode"
    CODABAR = "codabar"
    CODE93 = "CODE93"


class TextAlignEnum(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TextPositionEnum(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


class FontWeightEnum(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"


class TextCaseEnum(str, Enum):
    NONE = "none"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"


class LevelEnum(str, Enum):
    """Three-step rating used for exposure, tampering resistance, privacy and print quality."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IssueTypeEnum(str, Enum):
    CONTENT = "content"
    FORMAT = "format"
    SIZE = "size"
    SETTINGS = "settings"
    COMPATIBILITY = "compatibility"


class SeverityEnum(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorTypeEnum(str, Enum):
    """
    Failure taxonomy recorded on failed results.

    ContentError, SizeError and SettingsError are found by the validator before
    any encoding is attempted. EncodingError is raised while the pattern,
    metadata, analysis or rendered payload is being produced.
    """
    CONTENT = "ContentError"
    SIZE = "SizeError"
    SETTINGS = "SettingsError"
    ENCODING = "EncodingError"


class ItemStatusEnum(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class BatchStatusEnum(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BarcodeCustomization(FrozenCamelModel):
    show_border: bool = Field(default=False, description="Draw a border around the whole symbol")
    border_width: float = Field(default=1, ge=0, allow_inf_nan=False, description="Border stroke width in pixels")
    border_color: str = Field(default="#000000", description="Border colour (hex code or CSS colour name)")
    show_quiet_zone: bool = Field(default=True, description="Reserve a quiet zone around the bars")
    quiet_zone_size: float = Field(default=10, ge=0, allow_inf_nan=False, description="Quiet zone size in pixels")
    custom_font: bool = Field(default=False, description="Whether a custom font family is used")
    font_weight: FontWeightEnum = Field(default=FontWeightEnum.NORMAL)
    text_case: TextCaseEnum = Field(default=TextCaseEnum.NONE, description="Case transform applied to the human readable text")


class BarcodeSettings(FrozenCamelModel):
    """
    Input for one encoding request.

    Settings are immutable; derive variants with ``model_copy(update=...)``.
    ``width`` is the bar module width and ``margin`` the outer quiet zone, both
    in pixels.
    """
    content: str = Field(
        ...,
        description="Content to encode in the barcode",
        json_schema_extra={"example": "HELLO"}
    )
    format: BarcodeFormatEnum = Field(
        default=BarcodeFormatEnum.CODE128,
        description="Barcode symbology",
        json_schema_extra={"example": "CODE128"}
    )
    width: float = Field(default=2, allow_inf_nan=False, description="Width of a single bar module in pixels")
    height: float = Field(default=80, allow_inf_nan=False, description="Height of the bars in pixels")
    display_value: bool = Field(default=True, description="Whether to display text with the barcode")
    background_color: str = Field(default="#ffffff", description="Background colour (hex code or CSS colour name)")
    line_color: str = Field(default="#000000", description="Bar and text colour (hex code or CSS colour name)")
    font_size: float = Field(default=12, allow_inf_nan=False, description="Font size of the human readable text in pixels")
    font_family: str = Field(default="Arial")
    text_align: TextAlignEnum = Field(default=TextAlignEnum.CENTER)
    text_position: TextPositionEnum = Field(default=TextPositionEnum.BOTTOM)
    text_margin: float = Field(default=5, allow_inf_nan=False, description="Distance between the bars and the text in pixels")
    margin: float = Field(default=15, allow_inf_nan=False, description="Outer margin around the barcode in pixels")
    customization: BarcodeCustomization = Field(default_factory=BarcodeCustomization)

    @property
    def display_text(self) -> str:
        if self.customization.text_case == TextCaseEnum.UPPERCASE:
            return self.content.upper()
        if self.customization.text_case == TextCaseEnum.LOWERCASE:
            return self.content.lower()
        return self.content


class BarcodeCapacity(FrozenCamelModel):
    numeric: int
    alphanumeric: int
    binary: int
    min_length: int
    max_length: int


class Size(FrozenCamelModel):
    width: float
    height: float


class BarcodeMetadata(FrozenCamelModel):
    format: BarcodeFormatEnum
    capacity: BarcodeCapacity
    actual_size: Size
    data_length: int
    module_count: int = Field(default=0, description="Number of modules in the generated bar/space pattern")
    checksum: str = ""
    encoding: str = "ASCII"
    compression_ratio: float
    quality_score: float = Field(..., ge=0, le=100)
    readability_score: float = Field(..., ge=0, le=100)


class BarcodeReadability(FrozenCamelModel):
    contrast_ratio: float
    bar_width: float
    quiet_zone: float
    aspect_ratio: float
    readability_score: float
    scan_distance: str
    lighting_conditions: List[str] = Field(default_factory=list)
    print_quality: LevelEnum


class BarcodeOptimization(FrozenCamelModel):
    data_efficiency: float
    size_optimization: float
    print_optimization: float
    scan_optimization: float
    overall_optimization: float


class BarcodeCompatibility(FrozenCamelModel):
    scanner_compatibility: List[str]
    industry_standards: List[str]
    print_compatibility: List[str]
    software_compatibility: List[str]
    limitations: List[str]


class BarcodeSecurity(FrozenCamelModel):
    data_exposure: LevelEnum
    tampering_resistance: LevelEnum
    privacy_level: LevelEnum
    security_score: float
    vulnerabilities: List[str]
    recommendations: List[str]


class BarcodeAnalysis(FrozenCamelModel):
    readability: BarcodeReadability
    optimization: BarcodeOptimization
    compatibility: BarcodeCompatibility
    security: BarcodeSecurity
    recommendations: List[str]
    warnings: List[str]


class ValidationIssue(FrozenCamelModel):
    message: str
    type: IssueTypeEnum
    severity: SeverityEnum = SeverityEnum.ERROR


class BarcodeValidation(FrozenCamelModel):
    is_valid: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    estimated_size: Size
    recommended_settings: BarcodeSettings


class RenderedBarcode(FrozenCamelModel):
    """Renderer output: a raster data-URL and the vector markup."""
    data_url: str
    svg: str


class BarcodeResult(FrozenCamelModel):
    """
    Outcome of one encoding request.

    ``metadata`` and ``analysis`` are only present on valid results; ``error``
    and ``error_type`` only on failed ones.
    """
    id: str
    settings: BarcodeSettings
    pattern: Optional[str] = None
    is_valid: bool
    error: Optional[str] = None
    error_type: Optional[ErrorTypeEnum] = None
    metadata: Optional[BarcodeMetadata] = None
    analysis: Optional[BarcodeAnalysis] = None
    data_url: Optional[str] = None
    svg_string: Optional[str] = None
    created_at: datetime

    @property
    def content(self) -> str:
        return self.settings.content

    @property
    def format(self) -> BarcodeFormatEnum:
        return self.settings.format


class BatchSettings(CamelModel):
    content_list: List[str] = Field(..., description="Content items, one barcode each")
    base_settings: BarcodeSettings = Field(..., description="Settings shared by every item; content is replaced per item")
    naming_pattern: str = Field(default="", description="Name given to the batch")


class BatchStatistics(CamelModel):
    total_generated: int = 0
    successful_generated: int = 0
    failed_generated: int = 0
    average_size: float = 0
    average_quality: float = 0
    total_processing_time: float = Field(default=0, description="Wall-clock time of the run in milliseconds")
    average_processing_time: float = 0
    size_distribution: Dict[str, int] = Field(default_factory=dict)
    format_distribution: Dict[str, int] = Field(default_factory=dict)


class BarcodeBatch(CamelModel):
    id: str
    name: str
    settings: BatchSettings
    results: List[BarcodeResult] = Field(default_factory=list)
    statistics: BatchStatistics = Field(default_factory=BatchStatistics)
    status: BatchStatusEnum = BatchStatusEnum.PENDING
    progress: float = 0
    created_at: datetime
    completed_at: Optional[datetime] = None


class BatchProgress(CamelModel):
    """One step of a batch run, as streamed by ``BatchProcessor.iter_progress``."""
    index: int
    total: int
    status: ItemStatusEnum
    progress: float
    result: Optional[BarcodeResult] = None


class BarcodeTemplate(FrozenCamelModel):
    id: str
    name: str
    description: str
    category: str
    format: BarcodeFormatEnum
    settings: BarcodeSettings
    use_case: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)
    preview: Optional[str] = None


class FormatInfo(FrozenCamelModel):
    """Registry entry describing one symbology."""
    name: str
    code: BarcodeFormatEnum
    description: str
    capacity: BarcodeCapacity
    charset_pattern: str
    industry_standards: List[str]


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str
    cpu_usage: float
    memory_usage: float


class BulkFileMetadata(BaseModel):
    filename: str
    content_type: str
    item_count: int
    status: str
    message: str


class BulkUploadResponse(BaseModel):
    files_processed: List[BulkFileMetadata]
    batch: Optional[BarcodeBatch] = None


class BarcodeGenerationError(Exception):
    """
    Custom exception for barcode generation failures.

    Used to signal errors during the barcode creation process, providing
    a specific error type for better error handling and logging.
    """
    def __init__(self, message: str, error_type: str):
        """
        Initializes the BarcodeGenerationError.

        Args:
            message: A human-readable error message describing the issue.
            error_type: A category or code for the type of error (e.g., 'EncodingError').
        """
        self.message = message
        self.error_type = error_type
        super().__init__(self.message)


class EncodingError(BarcodeGenerationError):
    """Raised when a pattern, its metadata or its rendering cannot be produced."""
    def __init__(self, message: str):
        super().__init__(message, ErrorTypeEnum.ENCODING.value)
