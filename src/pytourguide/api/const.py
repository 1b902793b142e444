"""Constants for the marketplace backend API."""

TRIP_LIST_ENDPOINT = "/trip/trips"
TRIP_CREATE_ENDPOINT = "/trip/create"
TRIP_ENDPOINT = "/trip/{trip_id}"
TRIP_GUIDE_LIST_ENDPOINT = "/trip/{guide_id}/trips"

BOOKING_CREATE_ENDPOINT = "/booking/{trip_id}"
BOOKING_MINE_ENDPOINT = "/booking/myBookings"
BOOKING_ENDPOINT = "/booking/{booking_id}"
BOOKING_CANCEL_ENDPOINT = "/booking/{booking_id}/cancel"

CITY_ENDPOINT = "/city/{city}"
CITY_TRIPS_ENDPOINT = "/city/{city}/trips"
CITY_GUIDES_ENDPOINT = "/city/{city}/guides"

GUIDE_ENDPOINT = "/guide/{guide_id}"
GUIDE_REVIEWS_ENDPOINT = "/guide/{guide_id}/reviews"
GUIDE_POSTS_ENDPOINT = "/guide/{guide_id}/posts"
GUIDE_MY_POSTS_ENDPOINT = "/guide/posts"
GUIDE_POST_ENDPOINT = "/guide/posts/{post_id}"

REVIEW_CREATE_ENDPOINT = "/review"
REVIEW_MINE_ENDPOINT = "/review/my-reviews"
REVIEW_ENDPOINT = "/review/{review_id}"

USER_PROFILE_ENDPOINT = "/user/profile"
USER_CONTACT_ENDPOINT = "/user/{user_id}/contact"
USER_POST_LIKE_ENDPOINT = "/user/{user_id}/posts/{post_id}/like"
USER_POST_COMMENTS_ENDPOINT = "/user/{user_id}/posts/{post_id}/comments"
USER_POST_COMMENT_ENDPOINT = "/user/{user_id}/posts/{post_id}/comments/{comment_id}"

APPLICATION_MINE_ENDPOINT = "/tourist/applications/myApplication"
APPLICATION_LIST_ENDPOINT = "/admin/applications"
APPLICATION_DECISION_ENDPOINT = "/admin/applications/{application_id}/{decision}"

AUTH_HEADER = "Authorization"
AUTH_PREFIX = "Bearer "

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pytourguide",
}
