from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from .academics.http_academic_repository import HttpAcademicRepository
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.scope_selector import ScopeSelector
from .attendance.service import AttendanceWorkflow
from .attendance.student_service import StudentAttendanceService
from .auth.service import AuthService
from .core.constants import DEFAULT_CURRENCY, DEFAULT_PAYMENT_NOTE, DEFAULT_REQUEST_TIMEOUT, DEFAULT_SCHOOL_TIMEZONE
from .core.enums import Platform
from .fees.export.launcher import UrlLauncher, WebBrowserLauncher
from .fees.export.qr_export import DownloadQrExporter, QrImageExporter, ShareQrExporter
from .fees.factory import PaymentStrategyFactory
from .fees.http_fee_repository import HttpFeeRepository
from .fees.service import FeePaymentWorkflow
from .fees.upi import UpiPayee
from .gateway.client import GatewayConfig, RemoteGateway
from .session.store import SessionStore
from .storage.base import KeyValueStorage
from .storage.factory import StorageFactory


@dataclass(frozen=True)
class ClientSettings:
    backend_url: str
    storage_dir: Path
    download_dir: Path
    platform: Platform = Platform.WEB
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    school_timezone: str = DEFAULT_SCHOOL_TIMEZONE
    upi_payee_vpa: str = ""
    upi_payee_name: str = ""
    upi_note: str = DEFAULT_PAYMENT_NOTE
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class Container:
    settings: ClientSettings

    storage: KeyValueStorage
    session: SessionStore
    gateway: RemoteGateway

    academics_repo: HttpAcademicRepository
    attendance_repo: HttpAttendanceRepository
    fees_repo: HttpFeeRepository

    auth_service: AuthService
    student_attendance_service: StudentAttendanceService
    payment_strategies: PaymentStrategyFactory

    # Workflows hold per-screen state, so each screen visit gets a fresh one.

    def scope_selector(self, *, today: Optional[date] = None) -> ScopeSelector:
        return ScopeSelector(
            self.session,
            self.academics_repo,
            today=today,
            tz_name=self.settings.school_timezone,
        )

    def attendance_workflow(self) -> AttendanceWorkflow:
        return AttendanceWorkflow(self.attendance_repo, self.session)

    def fee_workflow(self) -> FeePaymentWorkflow:
        return FeePaymentWorkflow(
            self.fees_repo,
            self.session,
            self.payment_strategies,
            tz_name=self.settings.school_timezone,
        )

    def close(self) -> None:
        self.gateway.close()


def build_qr_exporter(settings: ClientSettings, launcher: UrlLauncher) -> QrImageExporter:
    if settings.platform == Platform.WEB:
        return DownloadQrExporter(settings.download_dir)
    return ShareQrExporter(Path(settings.storage_dir) / "cache", launcher)


def build_container(
    *,
    settings: ClientSettings,
    storage: Optional[KeyValueStorage] = None,
    launcher: Optional[UrlLauncher] = None,
    http=None,
) -> Container:
    storage = storage or StorageFactory(settings.storage_dir).for_platform(settings.platform)
    session = SessionStore(storage)
    gateway = RemoteGateway(
        GatewayConfig(base_url=settings.backend_url, timeout=settings.request_timeout),
        http=http,
        token_provider=lambda: session.auth_token,
    )

    academics_repo = HttpAcademicRepository(gateway)
    attendance_repo = HttpAttendanceRepository(gateway)
    fees_repo = HttpFeeRepository(gateway)

    launcher = launcher or WebBrowserLauncher()
    payee = UpiPayee(
        vpa=settings.upi_payee_vpa,
        name=settings.upi_payee_name,
        note=settings.upi_note,
        currency=settings.currency,
    )
    payment_strategies = PaymentStrategyFactory(
        payee=payee,
        exporter=build_qr_exporter(settings, launcher),
        launcher=launcher,
    )

    return Container(
        settings=settings,
        storage=storage,
        session=session,
        gateway=gateway,
        academics_repo=academics_repo,
        attendance_repo=attendance_repo,
        fees_repo=fees_repo,
        auth_service=AuthService(gateway, session),
        student_attendance_service=StudentAttendanceService(attendance_repo, session),
        payment_strategies=payment_strategies,
    )
