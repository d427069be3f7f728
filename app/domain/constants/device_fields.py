"""Constants for Device model field names"""


class DeviceFields:
    """Field name constants for Device model"""
    ID = "id"
    NAME = "name"
    BRAND = "brand"
    STATE = "state"
    CREATION_TIME = "creation_time"
    VERSION = "version"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field

    # Wire names accepted in sort expressions, mapped to stored field names
    SORTABLE = {
        "id": MONGO_ID,
        "name": NAME,
        "brand": BRAND,
        "state": STATE,
        "creationTime": CREATION_TIME,
    }
