"""Register identifiers of the motor control protocol.

A register identifier is a 16-bit word laid out as::

    | element (10 bits) | type (3 bits) | motor (3 bits) |
     15              6   5           3   2            0

The motor field is 1-based on the wire; zero addresses no particular motor.
"""

from __future__ import annotations

from enum import IntEnum

MCP_ID_SIZE = 2
MCP_ID_SIZE_16B = 1
ELT_IDENTIFIER_POS = 6
TYPE_POS = 3
TYPE_MASK = 0x38
MOTOR_MASK = 0x7
REG_MASK = 0xFFF8

_ELEMENT_MAX = 0x3FF
_ID_MAX = 0xFFFF


class DataType(IntEnum):
    """Kind of data a register holds, as stored in bits 3 to 5 of its id."""

    SEG_END = 0
    DATA_8BIT = 1
    DATA_16BIT = 2
    DATA_32BIT = 3
    STRING = 4
    RAW = 5
    FLAG = 6
    SEG_BEG = 7


def _reg(element: int, data_type: int) -> int:
    return (element << ELT_IDENTIFIER_POS) | (data_type << TYPE_POS)


class Register(IntEnum):
    """Known register identifiers, without a motor number."""

    # 8-bit registers
    STATUS = _reg(1, DataType.DATA_8BIT)
    CONTROL_MODE = _reg(2, DataType.DATA_8BIT)
    RUC_STAGE_NBR = _reg(3, DataType.DATA_8BIT)
    PFC_STATUS = _reg(13, DataType.DATA_8BIT)
    PFC_ENABLED = _reg(14, DataType.DATA_8BIT)
    SC_CHECK = _reg(15, DataType.DATA_8BIT)
    SC_STATE = _reg(16, DataType.DATA_8BIT)
    SC_STEPS = _reg(17, DataType.DATA_8BIT)
    SC_PP = _reg(18, DataType.DATA_8BIT)
    SC_FOC_REP_RATE = _reg(19, DataType.DATA_8BIT)
    SC_COMPLETED = _reg(20, DataType.DATA_8BIT)
    POSITION_CTRL_STATE = _reg(21, DataType.DATA_8BIT)
    POSITION_ALIGN_STATE = _reg(22, DataType.DATA_8BIT)
    HT_STATE = _reg(23, DataType.DATA_8BIT)
    HT_PROGRESS = _reg(24, DataType.DATA_8BIT)
    HT_PLACEMENT = _reg(25, DataType.DATA_8BIT)
    HT_MECH_WANTED_DIRECTION = _reg(26, DataType.DATA_8BIT)
    LOWSIDE_MODULATION = _reg(27, DataType.DATA_8BIT)
    QUASI_SYNCH = _reg(28, DataType.DATA_8BIT)
    PB_CHARACTERIZATION = _reg(29, DataType.DATA_8BIT)
    OPENLOOP_DC = _reg(30, DataType.DATA_8BIT)
    COMMUTATION_STEPBUFSIZE = _reg(31, DataType.DATA_8BIT)
    OPENLOOP = _reg(32, DataType.DATA_8BIT)
    OPENLOOP_REVUP = _reg(33, DataType.DATA_8BIT)
    OPENLOOP_VOLTFACTOR = _reg(34, DataType.DATA_8BIT)
    OPENLOOP_SENSING = _reg(35, DataType.DATA_8BIT)

    # 16-bit registers
    SPEED_KP = _reg(2, DataType.DATA_16BIT)
    SPEED_KI = _reg(3, DataType.DATA_16BIT)
    SPEED_KD = _reg(4, DataType.DATA_16BIT)
    I_Q_KP = _reg(6, DataType.DATA_16BIT)
    I_Q_KI = _reg(7, DataType.DATA_16BIT)
    I_Q_KD = _reg(8, DataType.DATA_16BIT)
    I_D_KP = _reg(10, DataType.DATA_16BIT)
    I_D_KI = _reg(11, DataType.DATA_16BIT)
    I_D_KD = _reg(12, DataType.DATA_16BIT)
    STOPLL_C1 = _reg(13, DataType.DATA_16BIT)
    STOPLL_C2 = _reg(14, DataType.DATA_16BIT)
    STOCORDIC_C1 = _reg(15, DataType.DATA_16BIT)
    STOCORDIC_C2 = _reg(16, DataType.DATA_16BIT)
    STOPLL_KI = _reg(17, DataType.DATA_16BIT)
    STOPLL_KP = _reg(18, DataType.DATA_16BIT)
    FLUXWK_KP = _reg(19, DataType.DATA_16BIT)
    FLUXWK_KI = _reg(20, DataType.DATA_16BIT)
    FLUXWK_BUS = _reg(21, DataType.DATA_16BIT)
    BUS_VOLTAGE = _reg(22, DataType.DATA_16BIT)
    HEATS_TEMP = _reg(23, DataType.DATA_16BIT)
    DAC_OUT1 = _reg(25, DataType.DATA_16BIT)
    DAC_OUT2 = _reg(26, DataType.DATA_16BIT)
    DAC_OUT3 = _reg(27, DataType.DATA_16BIT)
    FLUXWK_BUS_MEAS = _reg(30, DataType.DATA_16BIT)
    I_A = _reg(31, DataType.DATA_16BIT)
    I_B = _reg(32, DataType.DATA_16BIT)
    I_ALPHA_MEAS = _reg(33, DataType.DATA_16BIT)
    I_BETA_MEAS = _reg(34, DataType.DATA_16BIT)
    I_Q_MEAS = _reg(35, DataType.DATA_16BIT)
    I_D_MEAS = _reg(36, DataType.DATA_16BIT)
    I_Q_REF = _reg(37, DataType.DATA_16BIT)
    I_D_REF = _reg(38, DataType.DATA_16BIT)
    V_Q = _reg(39, DataType.DATA_16BIT)
    V_D = _reg(40, DataType.DATA_16BIT)
    V_ALPHA = _reg(41, DataType.DATA_16BIT)
    V_BETA = _reg(42, DataType.DATA_16BIT)
    ENCODER_EL_ANGLE = _reg(43, DataType.DATA_16BIT)
    ENCODER_SPEED = _reg(44, DataType.DATA_16BIT)
    STOPLL_EL_ANGLE = _reg(45, DataType.DATA_16BIT)
    STOPLL_ROT_SPEED = _reg(46, DataType.DATA_16BIT)
    STOPLL_I_ALPHA = _reg(47, DataType.DATA_16BIT)
    STOPLL_I_BETA = _reg(48, DataType.DATA_16BIT)
    STOPLL_BEMF_ALPHA = _reg(49, DataType.DATA_16BIT)
    STOPLL_BEMF_BETA = _reg(50, DataType.DATA_16BIT)
    STOCORDIC_EL_ANGLE = _reg(51, DataType.DATA_16BIT)
    STOCORDIC_ROT_SPEED = _reg(52, DataType.DATA_16BIT)
    STOCORDIC_I_ALPHA = _reg(53, DataType.DATA_16BIT)
    STOCORDIC_I_BETA = _reg(54, DataType.DATA_16BIT)
    STOCORDIC_BEMF_ALPHA = _reg(55, DataType.DATA_16BIT)
    STOCORDIC_BEMF_BETA = _reg(56, DataType.DATA_16BIT)
    DAC_USER1 = _reg(57, DataType.DATA_16BIT)
    DAC_USER2 = _reg(58, DataType.DATA_16BIT)
    HALL_EL_ANGLE = _reg(59, DataType.DATA_16BIT)
    HALL_SPEED = _reg(60, DataType.DATA_16BIT)
    FF_VQ = _reg(62, DataType.DATA_16BIT)
    FF_VD = _reg(63, DataType.DATA_16BIT)
    FF_VQ_PIOUT = _reg(64, DataType.DATA_16BIT)
    FF_VD_PIOUT = _reg(65, DataType.DATA_16BIT)
    PFC_DCBUS_REF = _reg(66, DataType.DATA_16BIT)
    PFC_DCBUS_MEAS = _reg(67, DataType.DATA_16BIT)
    PFC_ACBUS_FREQ = _reg(68, DataType.DATA_16BIT)
    PFC_ACBUS_RMS = _reg(69, DataType.DATA_16BIT)
    PFC_I_KP = _reg(70, DataType.DATA_16BIT)
    PFC_I_KI = _reg(71, DataType.DATA_16BIT)
    PFC_I_KD = _reg(72, DataType.DATA_16BIT)
    PFC_V_KP = _reg(73, DataType.DATA_16BIT)
    PFC_V_KI = _reg(74, DataType.DATA_16BIT)
    PFC_V_KD = _reg(75, DataType.DATA_16BIT)
    PFC_STARTUP_DURATION = _reg(76, DataType.DATA_16BIT)
    SC_PWM_FREQUENCY = _reg(77, DataType.DATA_16BIT)
    POSITION_KP = _reg(78, DataType.DATA_16BIT)
    POSITION_KI = _reg(79, DataType.DATA_16BIT)
    POSITION_KD = _reg(80, DataType.DATA_16BIT)
    SPEED_KP_DIV = _reg(81, DataType.DATA_16BIT)
    SPEED_KI_DIV = _reg(82, DataType.DATA_16BIT)
    SPEED_KD_DIV = _reg(83, DataType.DATA_16BIT)
    I_D_KP_DIV = _reg(84, DataType.DATA_16BIT)
    I_D_KI_DIV = _reg(85, DataType.DATA_16BIT)
    I_D_KD_DIV = _reg(86, DataType.DATA_16BIT)
    I_Q_KP_DIV = _reg(87, DataType.DATA_16BIT)
    I_Q_KI_DIV = _reg(88, DataType.DATA_16BIT)
    I_Q_KD_DIV = _reg(89, DataType.DATA_16BIT)
    POSITION_KP_DIV = _reg(90, DataType.DATA_16BIT)
    POSITION_KI_DIV = _reg(91, DataType.DATA_16BIT)
    POSITION_KD_DIV = _reg(92, DataType.DATA_16BIT)
    PFC_I_KP_DIV = _reg(93, DataType.DATA_16BIT)
    PFC_I_KI_DIV = _reg(94, DataType.DATA_16BIT)
    PFC_I_KD_DIV = _reg(95, DataType.DATA_16BIT)
    PFC_V_KP_DIV = _reg(96, DataType.DATA_16BIT)
    PFC_V_KI_DIV = _reg(97, DataType.DATA_16BIT)
    PFC_V_KD_DIV = _reg(98, DataType.DATA_16BIT)
    STOPLL_KI_DIV = _reg(99, DataType.DATA_16BIT)
    STOPLL_KP_DIV = _reg(100, DataType.DATA_16BIT)
    FLUXWK_KP_DIV = _reg(101, DataType.DATA_16BIT)
    FLUXWK_KI_DIV = _reg(102, DataType.DATA_16BIT)
    STARTUP_CURRENT_REF = _reg(105, DataType.DATA_16BIT)
    PULSE_VALUE = _reg(106, DataType.DATA_16BIT)
    FOC_VQREF = _reg(107, DataType.DATA_16BIT)
    OPENLOOP_CURRFACTOR = _reg(108, DataType.DATA_16BIT)
    OVERVOLTAGETHRESHOLD = _reg(112, DataType.DATA_16BIT)
    UNDERVOLTAGETHRESHOLD = _reg(113, DataType.DATA_16BIT)

    # 32-bit registers
    FAULTS_FLAGS = _reg(0, DataType.DATA_32BIT)
    SPEED_MEAS = _reg(1, DataType.DATA_32BIT)
    SPEED_REF = _reg(2, DataType.DATA_32BIT)
    STOPLL_EST_BEMF = _reg(3, DataType.DATA_32BIT)
    STOPLL_OBS_BEMF = _reg(4, DataType.DATA_32BIT)
    STOCORDIC_EST_BEMF = _reg(5, DataType.DATA_32BIT)
    STOCORDIC_OBS_BEMF = _reg(6, DataType.DATA_32BIT)
    FF_1Q = _reg(7, DataType.DATA_32BIT)
    FF_1D = _reg(8, DataType.DATA_32BIT)
    FF_2 = _reg(9, DataType.DATA_32BIT)
    PFC_FAULTS = _reg(40, DataType.DATA_32BIT)
    CURRENT_POSITION = _reg(41, DataType.DATA_32BIT)
    SC_RS = _reg(91, DataType.DATA_32BIT)
    SC_LS = _reg(92, DataType.DATA_32BIT)
    SC_KE = _reg(93, DataType.DATA_32BIT)
    SC_VBUS = _reg(94, DataType.DATA_32BIT)
    SC_MEAS_NOMINALSPEED = _reg(95, DataType.DATA_32BIT)
    SC_CURRENT = _reg(96, DataType.DATA_32BIT)
    SC_SPDBANDWIDTH = _reg(97, DataType.DATA_32BIT)
    SC_LDLQRATIO = _reg(98, DataType.DATA_32BIT)
    SC_NOMINAL_SPEED = _reg(99, DataType.DATA_32BIT)
    SC_CURRBANDWIDTH = _reg(100, DataType.DATA_32BIT)
    SC_J = _reg(101, DataType.DATA_32BIT)
    SC_F = _reg(102, DataType.DATA_32BIT)
    SC_MAX_CURRENT = _reg(103, DataType.DATA_32BIT)
    SC_STARTUP_SPEED = _reg(104, DataType.DATA_32BIT)
    SC_STARTUP_ACC = _reg(105, DataType.DATA_32BIT)
    MOTOR_POWER = _reg(109, DataType.DATA_32BIT)
    RESISTOR_OFFSET = _reg(116, DataType.DATA_32BIT)

    # Character strings
    FW_NAME = _reg(0, DataType.STRING)
    CTRL_STAGE_NAME = _reg(1, DataType.STRING)
    PWR_STAGE_NAME = _reg(2, DataType.STRING)
    MOTOR_NAME = _reg(3, DataType.STRING)

    # Raw structures
    GLOBAL_CONFIG = _reg(0, DataType.RAW)
    MOTOR_CONFIG = _reg(1, DataType.RAW)
    APPLICATION_CONFIG = _reg(2, DataType.RAW)
    FOCFW_CONFIG = _reg(3, DataType.RAW)
    SCALE_CONFIG = _reg(4, DataType.RAW)
    SPEED_RAMP = _reg(6, DataType.RAW)
    TORQUE_RAMP = _reg(7, DataType.RAW)
    REVUP_DATA = _reg(8, DataType.RAW)
    CURRENT_REF = _reg(13, DataType.RAW)
    POSITION_RAMP = _reg(14, DataType.RAW)
    ASYNC_UARTA = _reg(20, DataType.RAW)
    ASYNC_UARTB = _reg(21, DataType.RAW)
    ASYNC_STLNK = _reg(22, DataType.RAW)
    HT_HEW_PINS = _reg(28, DataType.RAW)
    HT_CONNECTED_PINS = _reg(29, DataType.RAW)
    HT_PHASE_SHIFT = _reg(30, DataType.RAW)
    BEMF_ADC_CONF = _reg(31, DataType.RAW)


def _check_id(value: int) -> None:
    if not 0 <= value <= _ID_MAX:
        raise ValueError(f"register id {value} does not fit in 16 bits")


def make_id(element: int, data_type: int, motor: int) -> int:
    """Assemble a register id from its element, data type and motor fields."""
    if not 0 <= element <= _ELEMENT_MAX:
        raise ValueError(f"element {element} does not fit in 10 bits")
    kind = DataType(data_type)
    if not 0 <= motor <= MOTOR_MASK:
        raise ValueError(f"motor {motor} does not fit in 3 bits")
    return _reg(element, kind) | motor


def extract_motor_id(data_id: int) -> int:
    """Zero-based motor index addressed by a register id."""
    _check_id(data_id)
    return (data_id - 1) & MOTOR_MASK


def data_type_of(reg_id: int) -> DataType:
    """Data type encoded in a register id."""
    _check_id(reg_id)
    return DataType((reg_id & TYPE_MASK) >> TYPE_POS)


def element_of(reg_id: int) -> int:
    """Element identifier encoded in a register id."""
    _check_id(reg_id)
    return reg_id >> ELT_IDENTIFIER_POS