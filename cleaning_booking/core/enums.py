from enum import Enum


class HomeSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"
    XXLARGE = "xxlarge"

    def __str__(self):
        return self.value


class CleaningType(str, Enum):
    STANDARD = "standard"
    DEEP = "deep"
    MOVE_IN_OUT = "movein"
    AIRBNB = "airbnb"
    OFFICE = "office"
    POST_CONSTRUCTION = "post_construction"

    def __str__(self):
        return self.value


class Frequency(str, Enum):
    ONE_TIME = "oneTime"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    TRIWEEKLY = "triweekly"
    MONTHLY = "monthly"

    def __str__(self):
        return self.value


class AddOn(str, Enum):
    INSIDE_FRIDGE = "insideFridge"
    INSIDE_OVEN = "insideOven"
    INSIDE_CABINETS = "insideCabinets"
    WINDOWS_UP_TO_6 = "windowsUpTo6"
    WINDOWS_UP_TO_12 = "windowsUpTo12"
    WINDOWS_UP_TO_24 = "windowsUpTo24"
    CHANGE_BED_SHEETS = "changeBedSheets"
    LOAD_DISHWASHER = "loadDishwasher"
    SANITIZATION = "sanitization"
    BASEMENT = "basement"
    ADDITIONAL_KITCHEN = "additionalKitchen"
    DEEP_CLEAN = "deepClean"
    MOVE_IN_OUT = "moveInOut"

    def __str__(self):
        return self.value


class PricingCategory(str, Enum):
    HOME_SIZE = "homeSize"
    BEDROOMS = "bedrooms"
    BATHROOMS = "bathrooms"
    HALF_BATHS = "halfBaths"
    CLEANING_TYPE = "cleaningType"
    ADD_ONS = "addOns"
    FREQUENCY = "frequency"

    def __str__(self):
        return self.value


class AddOnsStage(str, Enum):
    BEFORE_MULTIPLIER = "before_multiplier"
    AFTER_MULTIPLIER = "after_multiplier"

    def __str__(self):
        return self.value


class TimeSlot(str, Enum):
    MORNING = "8-11"
    MIDDAY = "11-2"
    AFTERNOON = "2-5"
    EVENING = "5-8"

    def __str__(self):
        return self.value


class BookingStep(str, Enum):
    SERVICE_DETAILS = "service_details"
    DATE_TIME = "date_time"
    ADDRESS = "address"
    PAYMENT = "payment"
    CONFIRMATION = "confirmation"

    def __str__(self):
        return self.value


class PaymentOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    DECLINED = "declined"
    CONFIGURATION_ERROR = "configuration_error"

    def __str__(self):
        return self.value
