"""Feature areas covered by dynamic module grants."""

from enum import StrEnum


class ModuleKey(StrEnum):
    """Module keys, in display order."""

    GMW_HUB = "gmw_hub"
    GM_DNA = "gm_dna"
    GMW_PULSE = "gmw_pulse"
    LOG_KAYITLARI = "log_kayitlari"
    BILDIRIMLER = "bildirimler"

    @property
    def label(self) -> str:
        return MODULE_LABELS[self]


MODULE_LABELS: dict[ModuleKey, str] = {
    ModuleKey.GMW_HUB: "GMW HUB",
    ModuleKey.GM_DNA: "GM DNA",
    ModuleKey.GMW_PULSE: "GMW Pulse",
    ModuleKey.LOG_KAYITLARI: "Log Kayıtları",
    ModuleKey.BILDIRIMLER: "Bildirimler",
}
