from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

# ---------- Common ----------


class SuccessResponse(BaseModel):
    success: bool = True


# ---------- Hotels ----------


class Hotel(BaseModel):
    id: str
    name: str
    rating: float
    price: float
    currency: str = "USD"
    location: str
    imageUrl: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    bookingUrl: Optional[str] = None


class HotelSearch(BaseModel):
    location: str
    checkInDate: str
    checkOutDate: str
    adults: int = 2
    children: int = 0
    rooms: int = 1
    currency: str = "USD"
    guestNationality: str = "US"


class HotelSearchRequest(BaseModel):
    location: Optional[str] = None
    checkInDate: Optional[str] = None
    checkOutDate: Optional[str] = None
    adults: Optional[int] = None
    children: Optional[int] = None
    rooms: Optional[int] = None
    currency: Optional[str] = None
    guestNationality: Optional[str] = None


class HotelQueryEcho(BaseModel):
    destination: str
    checkInDate: str
    checkOutDate: str
    adults: int
    children: int
    rooms: int


class HotelListResponse(BaseModel):
    hotels: List[Hotel]
    searchParams: HotelQueryEcho


class HotelSearchResponse(BaseModel):
    success: bool = True
    hotels: List[Hotel]


class HotelDetailResponse(BaseModel):
    success: bool = True
    hotel: Hotel


# ---------- Car rentals ----------


class CarRental(BaseModel):
    id: str
    company: str
    carType: str
    price: float
    currency: str = "USD"
    pickupLocation: str
    dropoffLocation: str
    rating: Optional[float] = None
    imageUrl: Optional[str] = None


class CarRentalSearch(BaseModel):
    pickUpLatitude: float
    pickUpLongitude: float
    dropOffLatitude: float
    dropOffLongitude: float
    pickUpTime: str = "10:00"
    dropOffTime: str = "10:00"
    driverAge: int = 25
    currencyCode: str = "USD"
    location: str = "US"


class CarRentalSearchRequest(BaseModel):
    pickUpLatitude: Optional[float] = None
    pickUpLongitude: Optional[float] = None
    dropOffLatitude: Optional[float] = None
    dropOffLongitude: Optional[float] = None
    pickUpTime: Optional[str] = None
    dropOffTime: Optional[str] = None
    driverAge: Optional[int] = None
    currencyCode: Optional[str] = None
    location: Optional[str] = None


class CarRentalResponse(BaseModel):
    success: bool = True
    carRentals: List[CarRental]


# ---------- Flights ----------

CabinClass = Literal["economy", "premium_economy", "business", "first"]


class FlightSearchParams(BaseModel):
    origin: str
    destination: str
    departureDate: str
    returnDate: Optional[str] = None
    passengers: int = 1
    cabinClass: CabinClass = "economy"
    maxPrice: Optional[int] = None


class Flight(BaseModel):
    id: str
    airline: str
    flightNumber: str
    origin: str
    destination: str
    departureTime: str
    arrivalTime: str
    duration: str
    price: float
    currency: str = "USD"
    stops: int
    cabinClass: str
    bookingUrl: str
    airlineLogo: Optional[str] = None


class Airport(BaseModel):
    code: str
    name: str
    city: str
    country: str
    latitude: float
    longitude: float


# ---------- Events ----------


class EventVenue(BaseModel):
    name: str
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Event(BaseModel):
    id: str
    name: str
    description: str
    startDate: str
    endDate: str
    venue: EventVenue
    category: str
    price: str
    url: Optional[str] = None
    image: Optional[str] = None


class EventsResponse(BaseModel):
    success: bool = True
    events: List[Event]
    city: str
    total: int
    source: Literal["ticketmaster", "fallback"]


# ---------- Music ----------


class Track(BaseModel):
    id: str
    name: str
    artist: str
    album: str
    duration: int
    previewUrl: Optional[str] = None
    imageUrl: Optional[str] = None
    spotifyUrl: str


class PlaylistRecommendation(BaseModel):
    name: str
    description: str
    tracks: List[Track]
    mood: str
    duration: str


class Playlist(BaseModel):
    id: str
    name: str
    description: str
    imageUrl: Optional[str] = None
    trackCount: int
    spotifyUrl: str
    tracks: List[Track] = Field(default_factory=list)


class CreatePlaylistRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = ""
    trackIds: Optional[List[str]] = None


# ---------- Translation ----------


class TranslationResult(BaseModel):
    originalText: str
    translatedText: str
    sourceLanguage: str
    targetLanguage: str
    confidence: float


class TranslateRequest(BaseModel):
    text: Optional[str] = None
    targetLanguage: Optional[str] = None
    sourceLanguage: str = "auto"


class Phrase(BaseModel):
    english: str
    translated: str
    pronunciation: Optional[str] = None


class PhraseBookSection(BaseModel):
    category: str
    phrases: List[Phrase]


class Language(BaseModel):
    code: str
    name: str


class DetectedLanguage(BaseModel):
    language: str


# ---------- Weather ----------


class CurrentWeather(BaseModel):
    temperature: float
    feelsLike: float
    humidity: float
    windSpeed: float
    description: str
    icon: str


class DailyForecast(BaseModel):
    date: str
    high: float
    low: float
    description: str
    icon: str
    precipitation: float


class WeatherRecommendations(BaseModel):
    clothing: List[str]
    activities: List[str]
    packing: List[str]


class WeatherData(BaseModel):
    location: str
    current: CurrentWeather
    forecast: List[DailyForecast]
    recommendations: WeatherRecommendations


# ---------- eSIM ----------


class ESIMPlan(BaseModel):
    id: str
    name: str
    country: str
    region: Optional[str] = None
    data: str
    duration: str
    price: float
    currency: str = "USD"
    features: List[str]
    coverage: List[str]
    activationType: Literal["instant", "manual"]
    qrCode: Optional[str] = None
    affiliateUrl: str


class CoverageInfo(BaseModel):
    hasCoverage: bool
    bestProvider: str
    averageSpeed: str
    networkType: str


class ESIMRecommendation(BaseModel):
    destination: str
    recommendedPlans: List[ESIMPlan]
    alternatives: List[ESIMPlan]
    tips: List[str]
    coverageInfo: CoverageInfo


# ---------- Payments ----------


class PaymentIntent(BaseModel):
    id: str
    amount: int
    currency: str
    status: str
    clientSecret: str
    paymentMethod: Optional[str] = None


class BookingPayment(BaseModel):
    id: str
    amount: int
    currency: str
    description: str
    status: str
    customerEmail: str
    metadata: Dict[str, str]
    createdAt: str


class PaymentRequest(BaseModel):
    amount: Optional[int] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    service: Optional[str] = None
    type: Optional[str] = None
    customerEmail: str = "user@example.com"


class PaymentResponse(BaseModel):
    success: bool = True
    paymentId: str
    amount: int
    currency: str
    status: str
    message: str


class PaymentStatusResponse(BaseModel):
    status: Optional[str] = None


class PaymentConfirmRequest(BaseModel):
    paymentIntentId: Optional[str] = None
    paymentMethodId: Optional[str] = None


class RefundRequest(BaseModel):
    paymentIntentId: Optional[str] = None
    reason: str = "requested_by_customer"
    amount: Optional[int] = None
    description: Optional[str] = None


class Currency(BaseModel):
    code: str
    name: str
    symbol: str


# ---------- AI: chat & trip generation ----------


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: Optional[datetime] = None


class ChatRequest(BaseModel):
    message: Optional[str] = None
    conversationHistory: List[ChatMessage] = Field(default_factory=list)


class TripRecommendations(BaseModel):
    destinations: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)


class ChatReply(BaseModel):
    message: str
    suggestions: List[str] = Field(default_factory=list)
    tripRecommendations: Optional[TripRecommendations] = None


class ChatResponse(BaseModel):
    success: bool = True
    response: ChatReply


class ChatbotStatus(BaseModel):
    available: bool
    service: str
    features: List[str]


class GenerateTripRequest(BaseModel):
    prompt: Optional[str] = None


class GenerateTripResponse(BaseModel):
    success: bool = True
    tripPlan: Dict[str, Any]


# ---------- Auth ----------

TravelStyle = Literal["budget", "luxury", "adventure", "relaxation"]


class UserPreferences(BaseModel):
    preferredCurrency: str = "USD"
    preferredLanguage: str = "en"
    travelStyle: TravelStyle = "adventure"
    dietaryRestrictions: List[str] = Field(default_factory=list)


class UserProfile(BaseModel):
    id: str
    email: str
    name: str
    picture: Optional[str] = None
    preferences: Optional[UserPreferences] = None


class SignUpRequest(BaseModel):
    email: str = ""
    password: str = ""
    name: str = ""


class SignInRequest(BaseModel):
    email: str = ""
    password: str = ""


class AuthResponse(BaseModel):
    success: bool = True
    user: UserProfile
    token: str


class PreferencesUpdate(BaseModel):
    preferredCurrency: Optional[str] = None
    preferredLanguage: Optional[str] = None
    travelStyle: Optional[TravelStyle] = None
    dietaryRestrictions: Optional[List[str]] = None


class ResetPasswordRequest(BaseModel):
    email: str = ""


class UpdatePasswordRequest(BaseModel):
    newPassword: str = ""


# ---------- Saved trips ----------


class SavedTrip(BaseModel):
    id: str
    userId: str
    title: str
    destination: str
    duration: str
    budget: str
    prompt: str
    tripPlan: Any = None
    createdAt: datetime
    updatedAt: datetime
    isFavorite: bool = False
    tags: List[str] = Field(default_factory=list)
    notes: str = ""


class SaveTripRequest(BaseModel):
    title: str = ""
    destination: str = ""
    duration: str = ""
    budget: str = ""
    prompt: str = ""
    tripPlan: Any = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None


class TripUpdateRequest(BaseModel):
    title: Optional[str] = None
    destination: Optional[str] = None
    duration: Optional[str] = None
    budget: Optional[str] = None
    prompt: Optional[str] = None
    tripPlan: Any = None
    isFavorite: Optional[bool] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None


class SaveTripResponse(BaseModel):
    success: bool = True
    trip: SavedTrip


class TripListResponse(BaseModel):
    success: bool = True
    trips: List[SavedTrip]


class TripStats(BaseModel):
    totalTrips: int = 0
    favoriteTrips: int = 0
    totalDestinations: int = 0
    averageBudget: int = 0
    mostVisitedDestination: str = ""


class TripNoteRequest(BaseModel):
    note: str


class TripTagRequest(BaseModel):
    tag: str
