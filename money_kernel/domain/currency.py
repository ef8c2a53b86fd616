"""Currency -- ISO 4217 registry and the Currency value object."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar


@dataclass(frozen=True)
class CurrencyInfo:
    """Registry entry for a single ISO 4217 currency."""

    code: str
    decimal_places: int
    name: str
    symbol: str | None = None

    @property
    def minor_unit(self) -> Decimal:
        """Smallest representable step, 10 ** -decimal_places."""
        return Decimal(1).scaleb(-self.decimal_places)

    @property
    def display_symbol(self) -> str:
        """Symbol used when rendering amounts; falls back to the code."""
        return self.symbol or self.code


def _entry(code: str, places: int, name: str, symbol: str | None = None) -> tuple[str, CurrencyInfo]:
    return code, CurrencyInfo(code, places, name, symbol)


class CurrencyRegistry:
    """Closed registry of ISO 4217 currencies.

    The registry is the only source of truth for which codes exist. It
    carries no exchange rates.
    """

    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = dict(
        [
            # Majors
            _entry("USD", 2, "US Dollar", "$"),
            _entry("EUR", 2, "Euro", "€"),
            _entry("GBP", 2, "Pound Sterling", "£"),
            _entry("JPY", 0, "Yen", "¥"),
            _entry("CHF", 2, "Swiss Franc", "CHF"),
            _entry("CAD", 2, "Canadian Dollar", "$"),
            _entry("AUD", 2, "Australian Dollar", "$"),
            _entry("NZD", 2, "New Zealand Dollar", "$"),
            _entry("CNY", 2, "Yuan Renminbi", "¥"),
            _entry("HKD", 2, "Hong Kong Dollar", "$"),
            _entry("SGD", 2, "Singapore Dollar", "$"),
            # Europe
            _entry("SEK", 2, "Swedish Krona", "kr"),
            _entry("NOK", 2, "Norwegian Krone", "kr"),
            _entry("DKK", 2, "Danish Krone", "kr"),
            _entry("ISK", 0, "Iceland Krona", "kr"),
            _entry("PLN", 2, "Zloty", "zł"),
            _entry("CZK", 2, "Czech Koruna", "Kč"),
            _entry("HUF", 2, "Forint", "Ft"),
            _entry("RON", 2, "Romanian Leu", "lei"),
            _entry("BGN", 2, "Bulgarian Lev", "лв"),
            _entry("RSD", 2, "Serbian Dinar"),
            _entry("UAH", 2, "Hryvnia", "₴"),
            _entry("TRY", 2, "Turkish Lira", "₺"),
            _entry("RUB", 2, "Russian Ruble", "₽"),
            # Americas
            _entry("MXN", 2, "Mexican Peso", "$"),
            _entry("BRL", 2, "Brazilian Real", "R$"),
            _entry("ARS", 2, "Argentine Peso", "$"),
            _entry("CLP", 0, "Chilean Peso", "$"),
            _entry("CLF", 4, "Unidad de Fomento"),
            _entry("COP", 2, "Colombian Peso", "$"),
            _entry("PEN", 2, "Sol", "S/"),
            _entry("UYU", 2, "Peso Uruguayo", "$"),
            _entry("UYW", 4, "Unidad Previsional"),
            _entry("PYG", 0, "Guarani", "₲"),
            # Asia / Pacific
            _entry("INR", 2, "Indian Rupee", "₹"),
            _entry("KRW", 0, "Won", "₩"),
            _entry("TWD", 2, "New Taiwan Dollar", "$"),
            _entry("THB", 2, "Baht", "฿"),
            _entry("IDR", 2, "Rupiah", "Rp"),
            _entry("MYR", 2, "Malaysian Ringgit", "RM"),
            _entry("PHP", 2, "Philippine Peso", "₱"),
            _entry("VND", 0, "Dong", "₫"),
            _entry("PKR", 2, "Pakistan Rupee", "₨"),
            _entry("VUV", 0, "Vatu"),
            # Middle East / Africa
            _entry("AED", 2, "UAE Dirham"),
            _entry("SAR", 2, "Saudi Riyal"),
            _entry("QAR", 2, "Qatari Rial"),
            _entry("ILS", 2, "New Israeli Sheqel", "₪"),
            _entry("EGP", 2, "Egyptian Pound"),
            _entry("BHD", 3, "Bahraini Dinar"),
            _entry("IQD", 3, "Iraqi Dinar"),
            _entry("JOD", 3, "Jordanian Dinar"),
            _entry("KWD", 3, "Kuwaiti Dinar"),
            _entry("LYD", 3, "Libyan Dinar"),
            _entry("OMR", 3, "Rial Omani"),
            _entry("TND", 3, "Tunisian Dinar"),
            _entry("ZAR", 2, "Rand", "R"),
            _entry("NGN", 2, "Naira", "₦"),
            _entry("KES", 2, "Kenyan Shilling"),
            _entry("MAD", 2, "Moroccan Dirham"),
            _entry("BIF", 0, "Burundi Franc"),
            _entry("DJF", 0, "Djibouti Franc"),
            _entry("GNF", 0, "Guinean Franc"),
            _entry("KMF", 0, "Comorian Franc"),
            _entry("RWF", 0, "Rwanda Franc"),
            _entry("UGX", 0, "Uganda Shilling"),
            _entry("XAF", 0, "CFA Franc BEAC"),
            _entry("XOF", 0, "CFA Franc BCEAO"),
            _entry("XPF", 0, "CFP Franc"),
            # Remaining ISO 4217 codes
            _entry("AFN", 2, "Afghan Afghani"),
            _entry("ALL", 2, "Albanian Lek"),
            _entry("AMD", 2, "Armenian Dram"),
            _entry("ANG", 2, "Netherlands Antillean Guilder"),
            _entry("AOA", 2, "Angolan Kwanza"),
            _entry("AWG", 2, "Aruban Florin"),
            _entry("AZN", 2, "Azerbaijan Manat"),
            _entry("BAM", 2, "Bosnia and Herzegovina Convertible Mark"),
            _entry("BBD", 2, "Barbadian Dollar"),
            _entry("BDT", 2, "Bangladeshi Taka"),
            _entry("BMD", 2, "Bermudian Dollar"),
            _entry("BND", 2, "Brunei Dollar"),
            _entry("BOB", 2, "Bolivian Boliviano"),
            _entry("BOV", 2, "Bolivian Mvdol"),
            _entry("BSD", 2, "Bahamian Dollar"),
            _entry("BTN", 2, "Bhutanese Ngultrum"),
            _entry("BWP", 2, "Botswana Pula"),
            _entry("BYN", 2, "Belarusian Ruble"),
            _entry("BZD", 2, "Belize Dollar"),
            _entry("CDF", 2, "Congolese Franc"),
            _entry("CHE", 2, "WIR Euro"),
            _entry("CHW", 2, "WIR Franc"),
            _entry("COU", 2, "Colombian Unidad de Valor Real"),
            _entry("CRC", 2, "Costa Rican Colon"),
            _entry("CUC", 2, "Cuban Convertible Peso"),
            _entry("CUP", 2, "Cuban Peso"),
            _entry("CVE", 2, "Cape Verdean Escudo"),
            _entry("DOP", 2, "Dominican Peso"),
            _entry("DZD", 2, "Algerian Dinar"),
            _entry("ERN", 2, "Eritrean Nakfa"),
            _entry("ETB", 2, "Ethiopian Birr"),
            _entry("FJD", 2, "Fijian Dollar"),
            _entry("FKP", 2, "Falkland Islands Pound"),
            _entry("GEL", 2, "Georgian Lari"),
            _entry("GHS", 2, "Ghanaian Cedi"),
            _entry("GIP", 2, "Gibraltar Pound"),
            _entry("GMD", 2, "Gambian Dalasi"),
            _entry("GTQ", 2, "Guatemalan Quetzal"),
            _entry("GYD", 2, "Guyanese Dollar"),
            _entry("HNL", 2, "Honduran Lempira"),
            _entry("HRK", 2, "Croatian Kuna"),
            _entry("HTG", 2, "Haitian Gourde"),
            _entry("IRR", 2, "Iranian Rial"),
            _entry("JMD", 2, "Jamaican Dollar"),
            _entry("KGS", 2, "Kyrgyzstani Som"),
            _entry("KHR", 2, "Cambodian Riel"),
            _entry("KPW", 2, "North Korean Won"),
            _entry("KYD", 2, "Cayman Islands Dollar"),
            _entry("KZT", 2, "Kazakhstani Tenge"),
            _entry("LAK", 2, "Lao Kip"),
            _entry("LBP", 2, "Lebanese Pound"),
            _entry("LKR", 2, "Sri Lankan Rupee"),
            _entry("LRD", 2, "Liberian Dollar"),
            _entry("LSL", 2, "Lesotho Loti"),
            _entry("MDL", 2, "Moldovan Leu"),
            _entry("MGA", 2, "Malagasy Ariary"),
            _entry("MKD", 2, "Macedonian Denar"),
            _entry("MMK", 2, "Myanmar Kyat"),
            _entry("MNT", 2, "Mongolian Tugrik"),
            _entry("MOP", 2, "Macanese Pataca"),
            _entry("MRU", 2, "Mauritanian Ouguiya"),
            _entry("MUR", 2, "Mauritian Rupee"),
            _entry("MVR", 2, "Maldivian Rufiyaa"),
            _entry("MWK", 2, "Malawian Kwacha"),
            _entry("MXV", 2, "Mexican Unidad de Inversion"),
            _entry("MZN", 2, "Mozambican Metical"),
            _entry("NAD", 2, "Namibian Dollar"),
            _entry("NIO", 2, "Nicaraguan Cordoba"),
            _entry("NPR", 2, "Nepalese Rupee"),
            _entry("PAB", 2, "Panamanian Balboa"),
            _entry("PGK", 2, "Papua New Guinean Kina"),
            _entry("SBD", 2, "Solomon Islands Dollar"),
            _entry("SCR", 2, "Seychellois Rupee"),
            _entry("SDG", 2, "Sudanese Pound"),
            _entry("SHP", 2, "Saint Helena Pound"),
            _entry("SLE", 2, "Sierra Leonean Leone"),
            _entry("SLL", 2, "Sierra Leonean Leone (old)"),
            _entry("SOS", 2, "Somali Shilling"),
            _entry("SRD", 2, "Surinamese Dollar"),
            _entry("SSP", 2, "South Sudanese Pound"),
            _entry("STN", 2, "Sao Tome and Principe Dobra"),
            _entry("SVC", 2, "Salvadoran Colon"),
            _entry("SYP", 2, "Syrian Pound"),
            _entry("SZL", 2, "Swazi Lilangeni"),
            _entry("TJS", 2, "Tajikistani Somoni"),
            _entry("TMT", 2, "Turkmenistan Manat"),
            _entry("TOP", 2, "Tongan Paanga"),
            _entry("TTD", 2, "Trinidad and Tobago Dollar"),
            _entry("TZS", 2, "Tanzanian Shilling"),
            _entry("USN", 2, "US Dollar (Next day)"),
            _entry("UYI", 0, "Uruguay Peso en Unidades Indexadas"),
            _entry("UZS", 2, "Uzbekistani Som"),
            _entry("VED", 2, "Venezuelan Bolivar Digital"),
            _entry("VES", 2, "Venezuelan Bolivar Soberano"),
            _entry("WST", 2, "Samoan Tala"),
            _entry("XBA", 0, "European Composite Unit"),
            _entry("XBB", 0, "European Monetary Unit"),
            _entry("XBC", 0, "European Unit of Account 9"),
            _entry("XBD", 0, "European Unit of Account 17"),
            _entry("XCD", 2, "East Caribbean Dollar"),
            _entry("XSU", 0, "Sucre"),
            _entry("XUA", 0, "ADB Unit of Account"),
            _entry("YER", 2, "Yemeni Rial"),
            _entry("ZMW", 2, "Zambian Kwacha"),
            _entry("ZWL", 2, "Zimbabwean Dollar"),
            _entry("XCG", 2, "Caribbean Guilder"),
            _entry("ZWG", 2, "Zimbabwe Gold"),
            # Metals, funds and special codes
            _entry("XAU", 0, "Gold"),
            _entry("XAG", 0, "Silver"),
            _entry("XPT", 0, "Platinum"),
            _entry("XPD", 0, "Palladium"),
            _entry("XDR", 0, "SDR (Special Drawing Right)"),
            _entry("XTS", 0, "Codes specifically reserved for testing purposes"),
            _entry("XXX", 0, "No currency"),
        ]
    )

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check if a currency code is a known ISO 4217 code."""
        if not code or not isinstance(code, str):
            return False
        return code.upper().strip() in cls._CURRENCIES

    @classmethod
    def get_info(cls, code: str) -> CurrencyInfo | None:
        """Look up registry information by code (case-insensitive)."""
        if not code or not isinstance(code, str):
            return None
        return cls._CURRENCIES.get(code.upper().strip())

    @classmethod
    def validate(cls, code: str) -> str:
        """Validate and normalize a currency code.

        Raises:
            ValueError: If the code is empty, not three characters long, or
                not in the registry.
        """
        if not code or not isinstance(code, str):
            raise ValueError(f"Invalid currency code: {code!r}")

        normalized = code.upper().strip()

        if len(normalized) != 3:
            raise ValueError(f"Currency code must be 3 characters: {code!r}")

        if normalized not in cls._CURRENCIES:
            raise ValueError(f"Invalid ISO 4217 currency code: {code!r}")

        return normalized

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        """All registered currency codes."""
        return frozenset(cls._CURRENCIES)


@dataclass(frozen=True, slots=True)
class Currency:
    """
    ISO 4217 currency identifier.

    Contract:
        Wraps a three-letter code, normalized to upper case and validated
        against CurrencyRegistry at construction. Equality and hashing are by
        code only; the type supplies no arithmetic.

    Non-goals:
        - Does NOT know exchange rates.
        - Does NOT format amounts (see Amount.__format__).
    """

    code: str

    def __post_init__(self) -> None:
        normalized = self.code.upper().strip() if isinstance(self.code, str) else ""
        if not CurrencyRegistry.is_valid(normalized):
            raise ValueError(f"Invalid ISO 4217 currency code: {self.code}")
        object.__setattr__(self, "code", normalized)

    @classmethod
    def of(cls, code: str | Currency) -> Currency:
        """Return ``code`` unchanged if it already is a Currency."""
        if isinstance(code, Currency):
            return code
        return cls(code)

    @property
    def info(self) -> CurrencyInfo:
        info = CurrencyRegistry.get_info(self.code)
        assert info is not None, f"validated code {self.code} missing from registry"
        return info

    @property
    def decimal_places(self) -> int:
        return self.info.decimal_places

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def symbol(self) -> str:
        return self.info.display_symbol

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"
