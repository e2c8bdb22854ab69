"""
Core constants for blueproxy.

Names of the BlueZ D-Bus objects and interfaces the proxies talk to, plus the
integer result codes attached to every package exception.
"""

# D-Bus Core Constants
DBUS_PROPERTIES = "org.freedesktop.DBus.Properties"
DBUS_OM_IFACE = "org.freedesktop.DBus.ObjectManager"
DBUS_ROOT_PATH = "/"

# BlueZ Core Constants
ADAPTER_NAME = "hci0"
BLUEZ_SERVICE_NAME = "org.bluez"
BLUEZ_NAMESPACE = "/org/bluez/"

# BlueZ Interface Constants
ADAPTER_INTERFACE = BLUEZ_SERVICE_NAME + ".Adapter1"
DEVICE_INTERFACE = BLUEZ_SERVICE_NAME + ".Device1"

# Child objects of an adapter are named <adapter path>/dev_AA_BB_CC_DD_EE_FF
DEVICE_PATH_PREFIX = "dev_"

# D-Bus signatures used by the adapter proxy
SIGNATURE__GET = "ss"
SIGNATURE__SET = "ssv"
SIGNATURE__REMOVE_DEVICE = "o"
SIGNATURE__CONNECT_DEVICE = "a{sv}"

# Largest value accepted for an unsigned 32-bit property
UINT32_MAX = 0xFFFFFFFF

# Result/Error Codes
RESULT_OK = 0
RESULT_ERR = 1
RESULT_ERR_NOT_SUPPORTED = 3
RESULT_ERR_WRONG_STATE = 5
RESULT_ERR_ACCESS_DENIED = 6
RESULT_ERR_BAD_ARGS = 8
RESULT_ERR_NOT_FOUND = 9
RESULT_ERR_NO_REPLY = 14
RESULT_ERR_ACTION_IN_PROGRESS = 16
RESULT_ERR_UNKNOWN_SERVCE = 17
RESULT_ERR_UNKNOWN_OBJECT = 18
RESULT_ERR_PARSE = 27
RESULT_ERR_CONFIG = 28
