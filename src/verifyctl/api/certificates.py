"""Clients for personal and signer certificates, both addressed by label."""

from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params
from verifyctl.models.certificate import PersonalCert, SignerCert


class PersonalCertClient(ResourceClient):
    path = "v1.0/personalcert"

    def create_personal_cert(self, cert: PersonalCert) -> str:
        uri = self._create(cert, "create the personal certificate")
        return uri if uri != self.base_url else self._url(cert.label)

    def get_personal_cert(self, label: str) -> Tuple[PersonalCert, str]:
        url = self._url(label)
        return self._get_one(url, PersonalCert, "get the personal certificate"), url

    def list_personal_certs(
        self, search: Optional[str] = None, sort: Optional[str] = None
    ) -> ListPage[PersonalCert]:
        return self._list(
            PersonalCert,
            "get the personal certificates",
            params=list_params(search=search, sort=sort),
        )

    def update_personal_cert(self, cert: PersonalCert) -> None:
        self._update(self._url(cert.label), cert, "update the personal certificate")

    def delete_personal_cert(self, label: str) -> None:
        self._delete(self._url(label), "delete the personal certificate")


class SignerCertClient(ResourceClient):
    path = "v1.0/signercert"

    def create_signer_cert(self, cert: SignerCert) -> str:
        uri = self._create(cert, "create the signer certificate")
        return uri if uri != self.base_url else self._url(cert.label)

    def get_signer_cert(self, label: str) -> Tuple[SignerCert, str]:
        url = self._url(label)
        return self._get_one(url, SignerCert, "get the signer certificate"), url

    def list_signer_certs(
        self, search: Optional[str] = None, sort: Optional[str] = None
    ) -> ListPage[SignerCert]:
        return self._list(
            SignerCert,
            "get the signer certificates",
            params=list_params(search=search, sort=sort),
        )

    def delete_signer_cert(self, label: str) -> None:
        self._delete(self._url(label), "delete the signer certificate")
