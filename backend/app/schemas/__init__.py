# Pydantic schemas
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    Token,
    RefreshTokenRequest,
    UserResponse,
    LoginResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    PasswordResetResponse,
    MessageResponse,
)
from app.schemas.catalog import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    ResourceCreate,
    ResourceUpdate,
    ResourceResponse,
    ResourceDetailResponse,
    ResourceListResponse,
)
from app.schemas.admission import (
    AdmissionGuideResponse,
    StepsReplace,
    StepCreate,
    StepUpdate,
    HelpTextUpdate,
    HelpTextResponse,
    AdmissionHelpCreate,
    AdmissionHelpRespond,
    AdmissionHelpResponse,
)
from app.schemas.help_request import (
    HelpRequestCreate,
    HelpRequestRespond,
    HelpRequestResponse,
)
