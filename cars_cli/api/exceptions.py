"""Exception definitions for cars-cli"""

from typing import Optional

from ..constants import ErrorCode, PipelineStage


class CarsError(Exception):
    """Base exception for cars-cli"""

    stage: Optional[PipelineStage] = None

    def __init__(self, message: str, error_code: str = None,
                 stage: Optional[PipelineStage] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        if stage is not None:
            self.stage = stage


# Manifest errors

class ManifestError(CarsError):
    """Manifest loading or validation error"""
    stage = PipelineStage.MANIFEST


class ManifestMissingError(ManifestError):
    """Manifest file does not exist"""

    def __init__(self, path: str):
        message = (
            f"{path} not found. Run 'cars init' in your project root "
            f"or use --project-root to point at it."
        )
        super().__init__(message, ErrorCode.MANIFEST_MISSING)
        self.path = path


class ManifestInvalidError(ManifestError):
    """Manifest exists but cannot be parsed or has the wrong shape"""

    def __init__(self, message: str, error_code: str = ErrorCode.MANIFEST_INVALID):
        super().__init__(message, error_code)


class InvalidSchemaError(ManifestInvalidError):
    """Manifest schema sentinel does not identify a deployable project"""

    def __init__(self, schema: Optional[str], expected: str):
        message = f"Invalid schema in manifest: expected '{expected}', got '{schema}'"
        super().__init__(message, ErrorCode.INVALID_SCHEMA)
        self.schema = schema


# Target resolution errors

class TargetError(CarsError):
    """Deployment target resolution error"""
    stage = PipelineStage.TARGET


class TargetNotFoundError(TargetError):
    """No target matches the given ordinal or name"""

    def __init__(self, identifier: str):
        super().__init__(f'Configuration "{identifier}" not found.', ErrorCode.TARGET_NOT_FOUND)
        self.identifier = identifier


class TargetNotEligibleError(TargetError):
    """Target belongs to a provider this client does not operate on"""

    def __init__(self, identifier: str, provider: str):
        message = f'Configuration "{identifier}" is not a CARS configuration (provider: {provider}).'
        super().__init__(message, ErrorCode.TARGET_NOT_ELIGIBLE)
        self.identifier = identifier
        self.provider = provider


class NoEligibleTargetError(TargetError):
    """Manifest contains no target for this client's provider"""

    def __init__(self, message: str = None):
        if message is None:
            message = "No CARS configurations found. Add one with 'cars config add'."
        super().__init__(message, ErrorCode.NO_ELIGIBLE_TARGET)


class AmbiguousTargetError(TargetError):
    """Several eligible targets and no way to choose between them"""

    def __init__(self, names):
        message = (
            f"Multiple CARS configurations found ({', '.join(names)}). "
            f"Specify one by name or index."
        )
        super().__init__(message, ErrorCode.AMBIGUOUS_TARGET)
        self.names = list(names)


class MissingProjectIdError(TargetError):
    """Remote operation on a target without a project ID"""

    def __init__(self, name: str):
        super().__init__(f'No project ID set in configuration "{name}".',
                         ErrorCode.MISSING_PROJECT_ID)
        self.name = name


class MissingCloudUrlError(TargetError):
    """Remote operation on a target without a control-plane URL"""

    def __init__(self, name: str):
        super().__init__(f'No CARS Cloud URL set in configuration "{name}".',
                         ErrorCode.MISSING_CLOUD_URL)
        self.name = name


# Build errors

class BuildError(CarsError):
    """Build orchestration error"""
    stage = PipelineStage.BUILD


class LanguageContractError(BuildError):
    """A language-specific build contract is not satisfied"""
    pass


class BackendMissingError(LanguageContractError):
    """Backend requested but no backend project exists"""

    def __init__(self, path: str):
        super().__init__(f"Backend specified in deploy but no {path} found.",
                         ErrorCode.BACKEND_MISSING)
        self.path = path


class UnsupportedContractLanguageError(LanguageContractError):
    """Contracts declared in a language this client cannot compile"""

    def __init__(self, language: str, supported: str):
        message = f"Unsupported contracts language: {language}. Only '{supported}' is supported."
        super().__init__(message, ErrorCode.UNSUPPORTED_CONTRACT_LANGUAGE)
        self.language = language


class MissingCompileStepError(LanguageContractError):
    """Contracts declared but the backend has no compile step"""

    def __init__(self, path: str, step: str):
        message = f'No "{step}" script found in {path} for sCrypt contracts.'
        super().__init__(message, ErrorCode.MISSING_COMPILE_STEP)
        self.path = path
        self.step = step


class FrontendLanguageUnsetError(LanguageContractError):
    """Frontend requested but the manifest declares no frontend language"""

    def __init__(self):
        super().__init__(
            "Frontend is included in deploy but no frontend configuration (language) found.",
            ErrorCode.FRONTEND_LANGUAGE_UNSET
        )


class HtmlEntryMissingError(LanguageContractError):
    """HTML frontend without an entry point"""

    def __init__(self, path: str):
        super().__init__(f"Frontend language set to html but no {path} found.",
                         ErrorCode.HTML_ENTRY_MISSING)
        self.path = path


class UnsupportedFrontendLanguageError(LanguageContractError):
    """Frontend language other than react or html"""

    def __init__(self, language: str):
        message = (
            f"Unsupported frontend language: {language}. "
            f"Only 'react' or 'html' are currently supported."
        )
        super().__init__(message, ErrorCode.UNSUPPORTED_FRONTEND_LANGUAGE)
        self.language = language


class FrontendPackageMissingError(LanguageContractError):
    """Frontend language requires a build but there is no package file"""

    def __init__(self, path: str):
        super().__init__(f"Frontend language requires a build but no {path} found.",
                         ErrorCode.FRONTEND_PACKAGE_MISSING)
        self.path = path


class ReactOutputMissingError(LanguageContractError):
    """React build succeeded but produced no output directory"""

    def __init__(self, path: str):
        super().__init__(f"React build directory not found in {path} after build.",
                         ErrorCode.REACT_OUTPUT_MISSING)
        self.path = path


class StepFailedError(BuildError):
    """An external build step exited with a non-zero status"""

    def __init__(self, message: str, error_code: str, step: str, cwd: str, exit_code: int):
        super().__init__(f"{message} (exit code {exit_code})", error_code)
        self.step = step
        self.cwd = cwd
        self.exit_code = exit_code


class DependencyInstallError(StepFailedError):
    """Dependency installation failed"""

    def __init__(self, cwd: str, exit_code: int):
        super().__init__(f"Dependency installation failed in {cwd}.",
                         ErrorCode.DEPENDENCY_INSTALL_FAILED, "install", cwd, exit_code)


class BackendCompileError(StepFailedError):
    """Contract compilation failed"""

    def __init__(self, cwd: str, exit_code: int):
        super().__init__("sCrypt contract compilation failed.",
                         ErrorCode.BACKEND_COMPILE_FAILED, "compile", cwd, exit_code)


class BackendBuildError(StepFailedError):
    """Backend build step failed"""

    def __init__(self, cwd: str, exit_code: int):
        super().__init__("Backend build failed.",
                         ErrorCode.BACKEND_BUILD_FAILED, "build", cwd, exit_code)


class ReactBuildError(StepFailedError):
    """React frontend build step failed"""

    def __init__(self, cwd: str, exit_code: int):
        super().__init__("Frontend build (react) failed.",
                         ErrorCode.REACT_BUILD_FAILED, "build", cwd, exit_code)


# Filesystem errors

class StagingError(CarsError):
    """Staging directory could not be prepared"""
    stage = PipelineStage.STAGE

    def __init__(self, message: str, error_code: str = ErrorCode.STAGING_FAILED):
        super().__init__(message, error_code)


class StagingSourceMissingError(StagingError):
    """A source required for staging does not exist"""

    def __init__(self, path: str):
        super().__init__(f"Required source for staging not found: {path}",
                         ErrorCode.STAGING_SOURCE_MISSING)
        self.path = path


class ArchiveError(CarsError):
    """Archive could not be written"""
    stage = PipelineStage.PACKAGE

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.ARCHIVE_FAILED)


# Artifact errors

class ArtifactError(CarsError):
    """Local artifact management error"""
    pass


class ArtifactNotFoundError(ArtifactError):
    """Named artifact does not exist"""

    def __init__(self, name: str):
        super().__init__(f'Artifact "{name}" not found.', ErrorCode.ARTIFACT_NOT_FOUND)
        self.name = name


class NoArtifactError(ArtifactError):
    """No artifact has been built yet"""

    def __init__(self):
        super().__init__("No artifact found. Run `cars build` first.", ErrorCode.NO_ARTIFACT)


# Remote errors

class RemoteRequestError(CarsError):
    """Control-plane request failed"""
    stage = PipelineStage.REMOTE

    def __init__(self, message: str, server_error: Optional[str] = None,
                 status_code: Optional[int] = None):
        if server_error:
            message = f"{message}: {server_error}"
        super().__init__(message, ErrorCode.REMOTE_REQUEST_FAILED)
        self.server_error = server_error
        self.status_code = status_code


class RemoteProjectNotFoundError(CarsError):
    """Project ID is not known to the control plane"""
    stage = PipelineStage.REMOTE

    def __init__(self, project_id: str, cloud_url: str):
        super().__init__(f'Project ID "{project_id}" not found on server {cloud_url}.',
                         ErrorCode.REMOTE_PROJECT_NOT_FOUND)
        self.project_id = project_id
        self.cloud_url = cloud_url


class ConfigError(CarsError):
    """User configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class UserCancelledError(CarsError):
    """User cancelled the operation"""

    def __init__(self):
        super().__init__("Operation cancelled by user")
