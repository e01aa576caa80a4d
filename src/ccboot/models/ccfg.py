"""Customer configuration (CCFG) field identifiers for SetCCFG."""

from __future__ import annotations

from enum import IntEnum


class CCFGFieldID(IntEnum):
    SECTOR_PROT = 0
    IMAGE_VALID = 1
    TEST_TAP_LCK = 2
    PRCM_TAP_LCK = 3
    CPU_DAP_LCK = 4
    WUC_TAP_LCK = 5
    PBIST1_TAP_LCK = 6
    PBIST2_TAP_LCK = 7
    BANK_ERASE_DIS = 8
    CHIP_ERASE_DIS = 9
    TI_FA_ENABLE = 10
    BL_BACKDOOR_EN = 11
    BL_BACKDOOR_PIN = 12
    BL_BACKDOOR_LEVEL = 13
    BL_ENABLE = 14
