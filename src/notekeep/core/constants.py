# Static lists used by signup validation

# Disposable / throwaway mail providers
BLOCKED_EMAIL_DOMAINS = frozenset(
    {
        "tempmail.com",
        "throwaway.com",
        "10minutemail.com",
        "mailinator.com",
        "guerrillamail.com",
        "dispostable.com",
        "maildrop.cc",
        "fakeinbox.com",
        "temp-mail.org",
        "yopmail.com",
        "getnada.com",
        "trashmail.com",
        "mintemail.com",
        "emailondeck.com",
        "temp-mail.io",
        "mailcatch.com",
        "spamgourmet.com",
        "mailnesia.com",
    }
)

# Passwords that pass the character rules but show up in every breach dump
COMMON_PASSWORDS = frozenset(
    {
        "Password123!",
        "Admin123!",
        "Welcome@123",
        "Qwerty2024!",
        "StrongPass1!",
        "SuperSecure2#",
        "TestUser3@",
        "MyPass2025$",
        "SecureMe4%",
        "AlphaBeta5!",
        "HelloWorld6*",
        "LetMeIn7!",
        "TrustNo18@",
        "Freedom2023!",
        "Football9#",
        "DragonFire0!",
        "MasterKey1#",
        "MonkeyPass2@",
        "StarWars3!",
        "BaseBall4$",
    }
)

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"
