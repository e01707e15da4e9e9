"""Constants for User model field names"""


class UserFields:
    """Field name constants for User documents and registration forms"""
    ID = "id"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    PASSWORD = "password"
    HASHED_PASSWORD = "password"
    PICTURE_PATH = "picturePath"
    FRIENDS = "friends"
    LOCATION = "location"
    OCCUPATION = "occupation"
    VIEWED_PROFILE = "viewedProfile"
    IMPRESSIONS = "impressions"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    # Multipart file field carrying the profile picture
    PICTURE = "picture"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field

    # Fields a registration form must provide
    REQUIRED_REGISTRATION_FIELDS = (
        FIRST_NAME,
        LAST_NAME,
        EMAIL,
        PASSWORD,
        LOCATION,
        OCCUPATION,
    )
