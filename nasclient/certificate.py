"""TLS certificate management."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from .errors import NotFoundError
from .protocol import parse_datetime


class _Caller(Protocol):
    async def call(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...

    async def call_job(self, method: str, params: list[Any] | None = None, timeout: float | None = None) -> Any: ...


class CertificateCreateType(str, Enum):
    INTERNAL = "CERTIFICATE_CREATE_INTERNAL"
    IMPORTED = "CERTIFICATE_CREATE_IMPORTED"
    CSR = "CERTIFICATE_CREATE_CSR"
    IMPORTED_CSR = "CERTIFICATE_CREATE_IMPORTED_CSR"
    ACME = "CERTIFICATE_CREATE_ACME"


class CertificateKeyType(str, Enum):
    RSA = "RSA"
    EC = "EC"


class CertificateECCurve(str, Enum):
    BRAINPOOL_P512R1 = "BrainpoolP512R1"
    BRAINPOOL_P384R1 = "BrainpoolP384R1"
    BRAINPOOL_P256R1 = "BrainpoolP256R1"
    SECP256K1 = "SECP256K1"
    SECP384R1 = "SECP384R1"
    SECP521R1 = "SECP521R1"
    ED25519 = "ed25519"


class CertificateDigestAlgorithm(str, Enum):
    SHA1 = "SHA1"
    SHA224 = "SHA224"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return value or ""


@dataclass
class Certificate:
    """A TLS/SSL certificate as reported by the middleware."""

    id: int = 0
    type: int = 0
    name: str = ""
    certificate: str = ""
    privatekey: str = ""
    csr: str = ""
    acme: Any = None
    certificate_used: bool = False
    revoked: bool = False
    internal: str = ""
    ca: bool = False
    cert: str = ""
    chain: list[str] = field(default_factory=list)
    country: str = ""
    state: str = ""
    city: str = ""
    organization: str = ""
    organizational_unit: str = ""
    common: str = ""
    san: list[str] = field(default_factory=list)
    email: str = ""
    dn: str = ""
    subject: dict[str, Any] | None = None
    extensions: dict[str, Any] | None = None
    not_before: datetime | None = None
    not_after: datetime | None = None
    issuer: dict[str, Any] | None = None
    digest: str = ""
    serial: int = 0
    key_length: int = 0
    key_type: str = ""
    fingerprint: str = ""
    root_path: str = ""
    cert_type: str = ""
    cert_type_full: str = ""
    signed_by: Any = None
    lifetime: int = 0
    from_: str = ""
    parsed: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Certificate:
        return cls(
            id=data.get("id") or 0,
            type=data.get("type") or 0,
            name=data.get("name") or "",
            certificate=data.get("certificate") or "",
            privatekey=data.get("privatekey") or "",
            csr=data.get("CSR") or "",
            acme=data.get("acme"),
            certificate_used=bool(data.get("certificate_used", False)),
            revoked=bool(data.get("revoked", False)),
            internal=data.get("internal") or "",
            ca=bool(data.get("ca", False)),
            cert=data.get("cert") or "",
            chain=list(data.get("chain") or []),
            country=data.get("country") or "",
            state=data.get("state") or "",
            city=data.get("city") or "",
            organization=data.get("organization") or "",
            organizational_unit=data.get("organizational_unit") or "",
            common=data.get("common") or "",
            san=list(data.get("san") or []),
            email=data.get("email") or "",
            dn=data.get("DN") or "",
            subject=data.get("subject"),
            extensions=data.get("extensions"),
            not_before=parse_datetime(data.get("not_before")),
            not_after=parse_datetime(data.get("not_after")),
            issuer=data.get("issuer"),
            digest=data.get("digest") or "",
            serial=data.get("serial") or 0,
            key_length=data.get("key_length") or 0,
            key_type=data.get("key_type") or "",
            fingerprint=data.get("fingerprint") or "",
            root_path=data.get("root_path") or "",
            cert_type=data.get("cert_type") or "",
            cert_type_full=data.get("cert_type_full") or "",
            signed_by=data.get("signed_by"),
            lifetime=data.get("lifetime") or 0,
            from_=data.get("from") or "",
            parsed=bool(data.get("parsed", False)),
        )


@dataclass
class BasicConstraints:
    ca: bool = False
    enabled: bool = False
    path_length: int | None = None
    extension_critical: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "ca": self.ca,
            "enabled": self.enabled,
            "path_length": self.path_length,
            "extension_critical": self.extension_critical,
        }


@dataclass
class AuthorityKeyIdentifier:
    authority_cert_issuer: bool = False
    enabled: bool = False
    extension_critical: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "authority_cert_issuer": self.authority_cert_issuer,
            "enabled": self.enabled,
            "extension_critical": self.extension_critical,
        }


@dataclass
class ExtendedKeyUsage:
    usages: list[str] | None = None
    enabled: bool = False
    extension_critical: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "usages": self.usages,
            "enabled": self.enabled,
            "extension_critical": self.extension_critical,
        }


@dataclass
class KeyUsage:
    enabled: bool = False
    digital_signature: bool = False
    content_commitment: bool = False
    key_encipherment: bool = False
    data_encipherment: bool = False
    key_agreement: bool = False
    key_cert_sign: bool = False
    crl_sign: bool = False
    encipher_only: bool = False
    decipher_only: bool = False
    extension_critical: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "digital_signature": self.digital_signature,
            "content_commitment": self.content_commitment,
            "key_encipherment": self.key_encipherment,
            "data_encipherment": self.data_encipherment,
            "key_agreement": self.key_agreement,
            "key_cert_sign": self.key_cert_sign,
            "crl_sign": self.crl_sign,
            "encipher_only": self.encipher_only,
            "decipher_only": self.decipher_only,
            "extension_critical": self.extension_critical,
        }


@dataclass
class CertificateExtensions:
    """X.509v3 extensions; extensions left as None are not sent."""

    basic_constraints: BasicConstraints | None = None
    authority_key_identifier: AuthorityKeyIdentifier | None = None
    extended_key_usage: ExtendedKeyUsage | None = None
    key_usage: KeyUsage | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.basic_constraints is not None:
            out["BasicConstraints"] = self.basic_constraints.to_dict()
        if self.authority_key_identifier is not None:
            out["AuthorityKeyIdentifier"] = self.authority_key_identifier.to_dict()
        if self.extended_key_usage is not None:
            out["ExtendedKeyUsage"] = self.extended_key_usage.to_dict()
        if self.key_usage is not None:
            out["KeyUsage"] = self.key_usage.to_dict()
        return out


@dataclass
class CertificateCreateRequest:
    """Parameters for ``certificate.create``; empty optional fields are not sent."""

    name: str = ""
    create_type: CertificateCreateType | str = ""

    key_length: int = 0
    key_type: CertificateKeyType | str = ""
    ec_curve: CertificateECCurve | str = ""
    digest_algorithm: CertificateDigestAlgorithm | str = ""
    lifetime: int = 0
    country: str = ""
    state: str = ""
    city: str = ""
    organization: str = ""
    organizational_unit: str = ""
    email: str = ""
    common: str = ""
    san: list[str] | None = None
    signed_by: int = 0
    cert_extensions: CertificateExtensions | None = None

    certificate: str = ""
    privatekey: str = ""
    passphrase: str = ""

    csr: str = ""

    tos: bool = False
    csr_id: int = 0
    acme_directory_uri: str = ""
    dns_mapping: dict[str, str] | None = None
    renew_days: int = 0

    type: int = 0
    serial: int = 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "create_type": _text(self.create_type)}
        optional: list[tuple[str, Any]] = [
            ("key_length", self.key_length),
            ("key_type", _text(self.key_type)),
            ("ec_curve", _text(self.ec_curve)),
            ("digest_algorithm", _text(self.digest_algorithm)),
            ("lifetime", self.lifetime),
            ("country", self.country),
            ("state", self.state),
            ("city", self.city),
            ("organization", self.organization),
            ("organizational_unit", self.organizational_unit),
            ("email", self.email),
            ("common", self.common),
            ("san", self.san),
            ("signedby", self.signed_by),
        ]
        out.update((key, value) for key, value in optional if value)
        if self.cert_extensions is not None:
            out["cert_extensions"] = self.cert_extensions.to_dict()
        trailing: list[tuple[str, Any]] = [
            ("certificate", self.certificate),
            ("privatekey", self.privatekey),
            ("passphrase", self.passphrase),
            ("CSR", self.csr),
            ("tos", self.tos),
            ("csr_id", self.csr_id),
            ("acme_directory_uri", self.acme_directory_uri),
            ("dns_mapping", self.dns_mapping),
            ("renew_days", self.renew_days),
            ("type", self.type),
            ("serial", self.serial),
        ]
        out.update((key, value) for key, value in trailing if value)
        return out


@dataclass
class CertificateUpdateRequest:
    """Parameters for ``certificate.update``; empty fields are not sent."""

    name: str = ""
    revoked: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.revoked:
            out["revoked"] = True
        return out


class CertificateClient:
    """Listing, creation, update and deletion of certificates, and their choices."""

    def __init__(self, client: _Caller) -> None:
        self.client = client

    async def list(self) -> list[Certificate]:
        result = await self.client.call("certificate.query", [])
        return [Certificate.from_dict(item) for item in result or []]

    async def get(self, cert_id: int) -> Certificate:
        result = await self.client.call("certificate.query", [[["id", "=", cert_id]]])
        if not result:
            raise NotFoundError("certificate", f"ID {cert_id}")
        return Certificate.from_dict(result[0])

    async def create(self, request: CertificateCreateRequest) -> Certificate:
        result = await self.client.call_job("certificate.create", [request.to_dict()])
        return Certificate.from_dict(result or {})

    async def update(self, cert_id: int, request: CertificateUpdateRequest) -> Certificate:
        result = await self.client.call_job("certificate.update", [cert_id, request.to_dict()])
        return Certificate.from_dict(result or {})

    async def delete(self, cert_id: int, force: bool = False) -> None:
        await self.client.call_job("certificate.delete", [cert_id, force])

    async def get_country_choices(self) -> dict[str, str]:
        return await self.client.call("certificate.country_choices", []) or {}

    async def get_key_type_choices(self) -> dict[str, str]:
        return await self.client.call("certificate.key_type_choices", []) or {}

    async def get_ec_curve_choices(self) -> dict[str, str]:
        return await self.client.call("certificate.ec_curve_choices", []) or {}

    async def get_extended_key_usage_choices(self) -> dict[str, str]:
        return await self.client.call("certificate.extended_key_usage_choices", []) or {}

    async def get_profiles(self) -> dict[str, Any]:
        """Return predefined certificate profiles for specific use cases."""
        return await self.client.call("certificate.profiles", []) or {}

    async def get_acme_server_choices(self) -> dict[str, str]:
        return await self.client.call("certificate.acme_server_choices", []) or {}