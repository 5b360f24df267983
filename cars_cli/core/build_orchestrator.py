"""Build orchestration for backend and frontend subsystems"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Type

from ..api.exceptions import (
    BackendBuildError,
    BackendCompileError,
    BackendMissingError,
    DependencyInstallError,
    FrontendLanguageUnsetError,
    FrontendPackageMissingError,
    HtmlEntryMissingError,
    MissingCompileStepError,
    ReactBuildError,
    ReactOutputMissingError,
    StepFailedError,
    UnsupportedContractLanguageError,
    UnsupportedFrontendLanguageError,
)
from ..constants import (
    FRONTEND_LANGUAGE_HTML,
    FRONTEND_LANGUAGE_REACT,
    STEP_BUILD,
    STEP_COMPILE,
    SUPPORTED_CONTRACT_LANGUAGE,
)
from ..models.manifest import ProjectManifest
from ..models.result import BuildOutputs
from ..models.target import DeploymentTarget
from .path_resolver import PathResolver
from .step_runner import StepRunner

logger = logging.getLogger(__name__)

INSTALL = "install"


@dataclass
class BuildStep:
    """One blocking external invocation

    Attributes:
        subsystem: ``project``, ``backend`` or ``frontend``
        name: ``install`` or a named step
        cwd: Working directory
        error: Exception raised on a non-zero exit
        expects: Path that must exist after the step succeeds
    """
    subsystem: str
    name: str
    cwd: Path
    error: Type[StepFailedError]
    expects: Optional[Path] = None

    @property
    def label(self) -> str:
        return f"{self.subsystem}:{self.name}"


@dataclass
class BuildPlan:
    """Ordered steps plus the outputs they will leave behind"""
    steps: List[BuildStep] = field(default_factory=list)
    outputs: BuildOutputs = field(default_factory=BuildOutputs)


class BuildOrchestrator:
    """Run the build steps implied by a manifest and a target

    All language contracts are checked before the first process is
    launched. Steps then run one at a time, backend before frontend, and
    the first failure aborts the build.
    """

    def __init__(self, path_resolver: PathResolver, step_runner: StepRunner):
        """
        Initialize build orchestrator

        Args:
            path_resolver: Resolver for the project root
            step_runner: Runner for install and named steps
        """
        self.path_resolver = path_resolver
        self.step_runner = step_runner

    def build(self, manifest: ProjectManifest, target: DeploymentTarget) -> BuildOutputs:
        """
        Build every subsystem in the target's deploy set

        Args:
            manifest: Project manifest
            target: Target whose deploy set decides what is built

        Returns:
            BuildOutputs describing what the stager should copy

        Raises:
            LanguageContractError: If a language contract is not satisfied
            StepFailedError: If a step exits with a non-zero status
        """
        plan = self.plan(manifest, target)
        self.execute(plan)
        return plan.outputs

    def plan(self, manifest: ProjectManifest, target: DeploymentTarget) -> BuildPlan:
        """
        Check language contracts and work out the steps to run

        No process is launched here.

        Args:
            manifest: Project manifest
            target: Target whose deploy set decides what is built

        Returns:
            BuildPlan
        """
        plan = BuildPlan()
        root = self.path_resolver.project_root

        if self.path_resolver.package_file(root).is_file():
            plan.steps.append(BuildStep("project", INSTALL, root, DependencyInstallError))

        if target.deploy.backend:
            self._plan_backend(manifest, plan)

        if target.deploy.frontend:
            self._plan_frontend(manifest, plan)

        return plan

    def execute(self, plan: BuildPlan) -> None:
        """
        Run planned steps in order, stopping at the first failure

        Args:
            plan: Plan from :meth:`plan`
        """
        for step in plan.steps:
            logger.info(f"Running {step.label} in {self.path_resolver.make_relative(step.cwd)}")

            if step.name == INSTALL:
                status = self.step_runner.install(step.cwd)
            else:
                status = self.step_runner.run_step(step.cwd, step.name)

            if status != 0:
                raise step.error(str(self.path_resolver.make_relative(step.cwd)), status)

            plan.outputs.steps.append(step.label)

            if step.expects is not None and not step.expects.exists():
                raise ReactOutputMissingError(str(self.path_resolver.make_relative(step.expects)))

    def _plan_backend(self, manifest: ProjectManifest, plan: BuildPlan) -> None:
        backend_dir = self.path_resolver.backend_dir
        package_file = self.path_resolver.package_file(backend_dir)
        if not package_file.is_file():
            raise BackendMissingError(str(self.path_resolver.make_relative(package_file)))

        language = manifest.contract_language
        if language:
            if language != SUPPORTED_CONTRACT_LANGUAGE:
                raise UnsupportedContractLanguageError(language, SUPPORTED_CONTRACT_LANGUAGE)

            if not self.step_runner.has_step(backend_dir, STEP_COMPILE):
                raise MissingCompileStepError(
                    str(self.path_resolver.make_relative(package_file)), STEP_COMPILE
                )

            plan.steps.append(BuildStep("backend", INSTALL, backend_dir, DependencyInstallError))
            plan.steps.append(BuildStep("backend", STEP_COMPILE, backend_dir, BackendCompileError))
            plan.steps.append(BuildStep("backend", STEP_BUILD, backend_dir, BackendBuildError))
        else:
            plan.steps.append(BuildStep("backend", INSTALL, backend_dir, DependencyInstallError))
            # Without contracts a backend may have nothing to build
            if self.step_runner.has_step(backend_dir, STEP_BUILD):
                plan.steps.append(BuildStep("backend", STEP_BUILD, backend_dir, BackendBuildError))
            else:
                logger.info("Backend declares no build step, skipping build")

        plan.outputs.backend_dir = backend_dir

    def _plan_frontend(self, manifest: ProjectManifest, plan: BuildPlan) -> None:
        language = manifest.frontend_language
        if not language:
            raise FrontendLanguageUnsetError()

        frontend_dir = self.path_resolver.frontend_dir(manifest)

        if language == FRONTEND_LANGUAGE_HTML:
            entry = self.path_resolver.html_entry(manifest)
            if not entry.is_file():
                raise HtmlEntryMissingError(str(self.path_resolver.make_relative(entry)))
            plan.outputs.frontend_dir = frontend_dir

        elif language == FRONTEND_LANGUAGE_REACT:
            package_file = self.path_resolver.package_file(frontend_dir)
            if not package_file.is_file():
                raise FrontendPackageMissingError(str(self.path_resolver.make_relative(package_file)))

            build_dir = self.path_resolver.react_build_dir(manifest)
            plan.steps.append(BuildStep("frontend", INSTALL, frontend_dir, DependencyInstallError))
            plan.steps.append(BuildStep("frontend", STEP_BUILD, frontend_dir, ReactBuildError,
                                        expects=build_dir))
            plan.outputs.frontend_dir = build_dir

        else:
            raise UnsupportedFrontendLanguageError(manifest.frontend.language)

        plan.outputs.frontend_language = language
