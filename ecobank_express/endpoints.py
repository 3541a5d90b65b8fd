"""
Business endpoint catalogue.

Each endpoint has a fixed path and its own signing policy: which field the
secure hash goes in and which part of the body it covers.
"""

from enum import Enum

from .constants import HashField
from .utils.hash_config import SecureHashConfig


class Endpoint(str, Enum):
    """Business endpoint paths."""

    SECURE_HASH_CHECK = "/corporateapi/merchant/securehash"
    CREATE_EXPRESS_ACCOUNT = "/corporateapi/merchant/createexpressaccount"
    MERCHANT_CATEGORY_CODE = "/corporateapi/merchant/getmcc"
    CREATE_MERCHANT_QR = "/corporateapi/merchant/createqr"
    DYNAMIC_QR_PAYMENT = "/corporateapi/merchant/qr"
    PAYMENT = "/corporateapi/merchant/payment"
    TRANSACTION_ENQUIRY = "/corporateapi/merchant/ecobankafrica/transaction/enquiry"
    ACCOUNT_BALANCE = "/corporateapi/merchant/accountbalance"
    ACCOUNT_ENQUIRY = "/corporateapi/merchant/accountinquiry"

    @property
    def path(self) -> str:
        return self.value

    @property
    def hash_config(self) -> SecureHashConfig:
        return ENDPOINT_HASH_CONFIGS[self]


ENDPOINT_HASH_CONFIGS = {
    Endpoint.SECURE_HASH_CHECK: SecureHashConfig.whole_body(HashField.CAMEL),
    Endpoint.CREATE_EXPRESS_ACCOUNT: SecureHashConfig.whole_body(HashField.CAMEL),
    Endpoint.MERCHANT_CATEGORY_CODE: SecureHashConfig.unsigned(),
    Endpoint.CREATE_MERCHANT_QR: SecureHashConfig.section("headerRequest", HashField.SNAKE),
    Endpoint.DYNAMIC_QR_PAYMENT: SecureHashConfig.whole_body(HashField.SNAKE),
    Endpoint.PAYMENT: SecureHashConfig.section("paymentHeader", HashField.CAMEL),
    Endpoint.TRANSACTION_ENQUIRY: SecureHashConfig.fields(["requestId"], HashField.CAMEL),
    Endpoint.ACCOUNT_BALANCE: SecureHashConfig.whole_body(HashField.CAMEL),
    Endpoint.ACCOUNT_ENQUIRY: SecureHashConfig.whole_body(HashField.CAMEL),
}
