from cassandra import DriverException, RequestExecutionException
from cassandra.cluster import NoHostAvailable

USER_TABLE_NAME = 'user'

USER_COLUMNS = (
    'user_email',
    'password',
    'name',
    'status',
    'last_activity',
    'auth_token',
    'google_token',
    'facebook_token',
)

# Every failure the driver raises for a request, whether raised locally or returned by the server.
CASSANDRA_ERRORS = (DriverException, RequestExecutionException, NoHostAvailable)
