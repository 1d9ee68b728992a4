LIST_EVENTS_URL = "/events"
DOWNLOAD_EVENT_ICS_URL = "/events/{event_id}"
SUBMIT_RSVP_URL = "/events/rsvp"
PAYMENT_STATUS_URL = "/payment-status/{invoice_id}"
CREATE_EVENT_URL = "/create-event"
DELETE_EVENT_URL = "/delete-event"
LIST_RSVPS_URL = "/list-rsvps"
